"""
src/audio/optimizer.py
=======================
Audio Optimizer — LyricPractice Audio Layer

Responsibility:
    - Decode a base64 recording (optionally a data: URI) to WAV bytes
    - Bring it to the speech-assessment format: mono, 16 kHz, 16-bit
    - Trim leading / trailing silence to cut billed audio seconds
    - Report the size reduction achieved

Stage order (fixed):
    1. Decode base64 → WAV bytes
    2. Parse header
    3. Downmix to mono           (only when channels > 1)
    4. Resample to 16 kHz        (only when rate differs)
    5. Trim silence

Metadata is re-parsed from each stage's output before the next stage runs.
Downmixing first halves the resample workload.
"""

import base64
import binascii
import logging
import os
import re
from dataclasses import dataclass

from src.audio.downmix import to_mono
from src.audio.resampler import resample
from src.audio.silence import DEFAULT_THRESHOLD, trim_silence
from src.audio.wav import AudioMetadata, MalformedContainer, parse_header

logger = logging.getLogger("lyricpractice.audio.optimizer")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TARGET_SAMPLE_RATE: int = 16000  # Hz

# Matches audio/wav, audio/x-wav, audio/webm;codecs=opus, ...
_DATA_URI_PREFIX: re.Pattern[str] = re.compile(
    r"^data:audio/[^;,]+(?:;[^,]*)?;base64,"
)


def _read_int_env(name: str, default: int) -> int:
    """Read an integer setting from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise RuntimeError(
            f"{name} must be an integer amplitude (got {raw!r})"
        ) from exc


SILENCE_THRESHOLD: int = _read_int_env("AUDIO_SILENCE_THRESHOLD", DEFAULT_THRESHOLD)


# ---------------------------------------------------------------------------
# Result type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OptimizationResult:
    """
    Output of optimize_audio().

    Attributes:
        buffer:                    Optimized WAV container bytes.
        metadata:                  Metadata of ``buffer``.
        compression_ratio_percent: (1 - final_size / original_size) * 100.
        original_metadata:         Metadata of the decoded input.
    """

    buffer: bytes
    metadata: AudioMetadata
    compression_ratio_percent: float
    original_metadata: AudioMetadata


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def decode_base64_audio(data: str) -> bytes:
    """
    Decode a base64 recording, stripping a ``data:audio/...;base64,`` prefix.

    Raises:
        MalformedContainer: If the payload is not valid base64.
    """
    payload = _DATA_URI_PREFIX.sub("", data.strip(), count=1)
    try:
        return base64.b64decode(payload, validate=False)
    except (binascii.Error, ValueError) as exc:
        raise MalformedContainer(f"Invalid base64 audio payload: {exc}") from exc


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def optimize_audio(
    audio: str | bytes,
    silence_threshold: int | None = None,
) -> OptimizationResult:
    """
    Run the full optimization pipeline on a single recording.

    Args:
        audio:             Base64 string (data URI allowed) or raw WAV bytes.
        silence_threshold: Override for the trim threshold; defaults to
                           AUDIO_SILENCE_THRESHOLD.

    Returns:
        OptimizationResult with the optimized buffer and size statistics.

    Raises:
        MalformedContainer:       On undecodable input or bad WAV header.
        UnsupportedChannelLayout: On recordings with more than 2 channels.
        UnsupportedBitDepth:      When a required stage cannot handle the depth.
    """
    original = decode_base64_audio(audio) if isinstance(audio, str) else bytes(audio)
    original_size = len(original)

    buffer = original
    metadata = parse_header(buffer)
    original_metadata = metadata
    _log_metadata("Original", metadata)

    # Step 1: mono
    if metadata.channels > 1:
        buffer = to_mono(buffer, metadata)
        metadata = parse_header(buffer)
        logger.info("Converted to mono.")

    # Step 2: 16 kHz
    if metadata.sample_rate != TARGET_SAMPLE_RATE:
        buffer = resample(buffer, metadata, TARGET_SAMPLE_RATE)
        metadata = parse_header(buffer)
        logger.info("Resampled to %d Hz.", TARGET_SAMPLE_RATE)

    # Step 3: silence
    threshold = SILENCE_THRESHOLD if silence_threshold is None else silence_threshold
    buffer = trim_silence(buffer, metadata, threshold)
    metadata = parse_header(buffer)
    logger.info("Trimmed silence.")

    compression_ratio = (1 - len(buffer) / original_size) * 100
    _log_metadata("Final", metadata, compression_ratio)

    return OptimizationResult(
        buffer=buffer,
        metadata=metadata,
        compression_ratio_percent=compression_ratio,
        original_metadata=original_metadata,
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _log_metadata(
    label: str,
    metadata: AudioMetadata,
    compression_ratio: float | None = None,
) -> None:
    """Log a one-line summary of ``metadata``."""
    suffix = "" if compression_ratio is None else f", compression={compression_ratio:.1f}%"
    logger.info(
        "%s: %d Hz, %d ch, %d-bit, %.2fs, %.2f KB%s",
        label,
        metadata.sample_rate,
        metadata.channels,
        metadata.bit_depth,
        metadata.duration_seconds,
        metadata.size_bytes / 1024,
        suffix,
    )
