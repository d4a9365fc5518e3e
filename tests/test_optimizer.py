"""
tests/test_optimizer.py
========================
Audio Optimizer & Validator Tests — LyricPractice Audio Layer

Tests verify:
    1. Base64 / data-URI decoding
    2. Full optimization pipeline (downmix → resample → trim)
    3. Compression statistics
    4. Validator accumulates every violated constraint
    5. Validator short-circuits on a malformed header

All tests are OFFLINE — recordings are synthesized with numpy.
"""

import base64
import os
import sys
import unittest
from unittest.mock import patch

import numpy as np

# Ensure project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from src.audio.optimizer import (
    TARGET_SAMPLE_RATE,
    _read_int_env,
    decode_base64_audio,
    optimize_audio,
)
from src.audio.validator import validate_audio
from src.audio.wav import (
    MalformedContainer,
    UnsupportedBitDepth,
    UnsupportedChannelLayout,
    build_wav,
    parse_header,
)


# ===================================================================
# Fixture helpers
# ===================================================================


def _speech_clip(
    sample_rate=44100,
    channels=2,
    lead_seconds=0.5,
    speech_seconds=2.0,
    tail_seconds=0.5,
    amplitude=8000,
):
    """16-bit WAV: silence, a 440 Hz tone, silence (same on every channel)."""
    lead = np.zeros(int(sample_rate * lead_seconds))
    t = np.arange(int(sample_rate * speech_seconds)) / sample_rate
    tone = amplitude * np.sin(2 * np.pi * 440 * t)
    tail = np.zeros(int(sample_rate * tail_seconds))
    mono = np.concatenate([lead, tone, tail]).astype("<i2")
    interleaved = np.repeat(mono, channels)
    return build_wav(interleaved.tobytes(), sample_rate, channels, 16)


def _silent_wav(seconds, sample_rate=16000, channels=1, bit_depth=16):
    n = int(seconds * sample_rate) * channels * (bit_depth // 8)
    return build_wav(bytes(n), sample_rate, channels, bit_depth)


# ===================================================================
# 1. Decoding
# ===================================================================


class TestDecodeBase64Audio(unittest.TestCase):

    def test_plain_base64(self):
        raw = _silent_wav(0.01)
        self.assertEqual(decode_base64_audio(base64.b64encode(raw).decode()), raw)

    def test_data_uri_prefix_stripped(self):
        raw = _silent_wav(0.01)
        encoded = "data:audio/wav;base64," + base64.b64encode(raw).decode()
        self.assertEqual(decode_base64_audio(encoded), raw)

    def test_vendor_mime_type_prefix_stripped(self):
        raw = _silent_wav(0.01)
        encoded = "data:audio/x-wav;base64," + base64.b64encode(raw).decode()
        self.assertEqual(decode_base64_audio(encoded), raw)

    def test_prefix_with_codec_parameter_stripped(self):
        raw = _silent_wav(0.01)
        encoded = "data:audio/webm;codecs=opus;base64," + base64.b64encode(raw).decode()
        self.assertEqual(decode_base64_audio(encoded), raw)

    def test_x_wav_data_uri_optimizes(self):
        raw = _silent_wav(0.5)
        result = optimize_audio("data:audio/x-wav;base64," + base64.b64encode(raw).decode())
        self.assertEqual(result.buffer, raw)

    def test_invalid_base64(self):
        with self.assertRaises(MalformedContainer):
            decode_base64_audio("abc")


class TestReadIntEnv(unittest.TestCase):

    def test_default_when_unset(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(_read_int_env("AUDIO_SILENCE_THRESHOLD", 500), 500)

    def test_default_when_blank(self):
        with patch.dict(os.environ, {"AUDIO_SILENCE_THRESHOLD": "  "}):
            self.assertEqual(_read_int_env("AUDIO_SILENCE_THRESHOLD", 500), 500)

    def test_parses_integer(self):
        with patch.dict(os.environ, {"AUDIO_SILENCE_THRESHOLD": "750"}):
            self.assertEqual(_read_int_env("AUDIO_SILENCE_THRESHOLD", 500), 750)

    def test_non_numeric_names_the_variable(self):
        with patch.dict(os.environ, {"AUDIO_SILENCE_THRESHOLD": "loud"}):
            with self.assertRaises(RuntimeError) as ctx:
                _read_int_env("AUDIO_SILENCE_THRESHOLD", 500)
        self.assertIn("AUDIO_SILENCE_THRESHOLD", str(ctx.exception))
        self.assertIn("loud", str(ctx.exception))


# ===================================================================
# 2. Pipeline
# ===================================================================


class TestOptimizeAudio(unittest.TestCase):

    def test_end_to_end_stereo_44k(self):
        raw = _speech_clip()
        original = parse_header(raw)
        self.assertAlmostEqual(original.duration_seconds, 3.0)

        result = optimize_audio(base64.b64encode(raw).decode())

        self.assertEqual(result.metadata.sample_rate, TARGET_SAMPLE_RATE)
        self.assertEqual(result.metadata.channels, 1)
        self.assertEqual(result.metadata.bit_depth, 16)
        self.assertLess(result.metadata.duration_seconds, 2.1)
        self.assertGreater(result.metadata.duration_seconds, 1.9)
        self.assertGreater(result.compression_ratio_percent, 0)
        self.assertEqual(result.metadata, parse_header(result.buffer))
        self.assertEqual(result.original_metadata, original)

    def test_output_passes_validation(self):
        result = optimize_audio(_speech_clip())
        outcome = validate_audio(result.buffer)
        self.assertTrue(outcome.valid, outcome.errors)

    def test_data_uri_input(self):
        raw = _speech_clip(sample_rate=16000, channels=1)
        encoded = "data:audio/wav;base64," + base64.b64encode(raw).decode()
        result = optimize_audio(encoded)
        self.assertEqual(result.metadata.sample_rate, 16000)

    def test_compression_ratio_formula(self):
        raw = _speech_clip(sample_rate=22050, channels=2)
        result = optimize_audio(raw)
        expected = (1 - len(result.buffer) / len(raw)) * 100
        self.assertAlmostEqual(result.compression_ratio_percent, expected)

    def test_already_optimal_silent_clip_unchanged(self):
        raw = _silent_wav(1.0)
        result = optimize_audio(raw)
        self.assertEqual(result.buffer, raw)
        self.assertEqual(result.compression_ratio_percent, 0.0)

    def test_silence_threshold_override(self):
        raw = _speech_clip(sample_rate=16000, channels=1, amplitude=400)
        self.assertEqual(optimize_audio(raw).buffer, raw)
        trimmed = optimize_audio(raw, silence_threshold=100)
        self.assertLess(len(trimmed.buffer), len(raw))

    def test_malformed_input(self):
        with self.assertRaises(MalformedContainer):
            optimize_audio(base64.b64encode(b"not a wav file").decode())

    def test_more_than_two_channels(self):
        with self.assertRaises(UnsupportedChannelLayout):
            optimize_audio(_silent_wav(0.5, channels=3))

    def test_8bit_needing_resample(self):
        with self.assertRaises(UnsupportedBitDepth):
            optimize_audio(_silent_wav(0.5, sample_rate=8000, bit_depth=8))

    def test_8bit_at_target_rate_passes_through(self):
        raw = _silent_wav(0.5, bit_depth=8)
        self.assertEqual(optimize_audio(raw).buffer, raw)


# ===================================================================
# 3. Validator
# ===================================================================


class TestValidateAudio(unittest.TestCase):

    def test_valid_buffer(self):
        outcome = validate_audio(_silent_wav(1.0))
        self.assertTrue(outcome.valid)
        self.assertEqual(outcome.errors, [])

    def test_8k_stereo_reports_two_errors(self):
        outcome = validate_audio(_silent_wav(1.0, sample_rate=8000, channels=2))
        self.assertFalse(outcome.valid)
        self.assertEqual(
            outcome.errors,
            [
                "Sample rate must be 16kHz (got 8000Hz)",
                "Must be mono audio (got 2 channels)",
            ],
        )

    def test_bit_depth(self):
        outcome = validate_audio(_silent_wav(1.0, bit_depth=8))
        self.assertEqual(outcome.errors, ["Bit depth must be 16-bit (got 8-bit)"])

    def test_too_long(self):
        outcome = validate_audio(_silent_wav(31.0))
        self.assertEqual(
            outcome.errors, ["Audio too long for REST API (31.0s, max 30s)"]
        )

    def test_too_short(self):
        outcome = validate_audio(_silent_wav(0.05))
        self.assertEqual(outcome.errors, ["Audio too short (0.05s, min 0.1s)"])

    def test_boundaries_inclusive(self):
        self.assertTrue(validate_audio(_silent_wav(0.1)).valid)
        self.assertTrue(validate_audio(_silent_wav(30.0)).valid)

    def test_malformed_header_single_error(self):
        outcome = validate_audio(b"RIFF")
        self.assertFalse(outcome.valid)
        self.assertEqual(outcome.errors, ["Invalid WAV file: too small"])

    def test_to_dict(self):
        outcome = validate_audio(_silent_wav(1.0, channels=2))
        self.assertEqual(
            outcome.to_dict(),
            {"valid": False, "errors": ["Must be mono audio (got 2 channels)"]},
        )


if __name__ == "__main__":
    unittest.main()
