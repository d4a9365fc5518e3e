"""
src/audio/silence.py
=====================
Silence Trimmer — LyricPractice Audio Layer

Responsibility:
    - Drop low-amplitude regions at the start and end of a 16-bit recording
    - Keep a short pre-roll / post-roll around the detected speech
    - Leave the buffer untouched when no speech is found

Only 16-bit PCM is trimmed. Any other depth takes the pass-through path and
the input is returned as-is.
"""

import logging

import numpy as np

from src.audio.wav import (
    AudioMetadata,
    BitDepth,
    build_wav,
    encode_samples,
    read_samples,
)

logger = logging.getLogger("lyricpractice.audio.silence")


DEFAULT_THRESHOLD: int = 500  # absolute amplitude, 16-bit scale
PADDING_SAMPLES: int = 100  # kept on each side of detected sound


def trim_silence(
    buffer: bytes,
    metadata: AudioMetadata,
    threshold: int = DEFAULT_THRESHOLD,
) -> bytes:
    """
    Trim leading and trailing silence.

    The kept range is ``[start, end)`` where ``start`` is 100 samples before
    the first sample louder than ``threshold`` and ``end`` is 100 samples
    after the last one, both clamped to the payload.

    Args:
        buffer:    WAV container bytes.
        metadata:  Metadata parsed from ``buffer``.
        threshold: Absolute amplitude a sample must exceed to count as sound.

    Returns:
        A new trimmed container, or ``buffer`` unchanged when the depth is
        unsupported, nothing exceeds the threshold, or the range collapses.
    """
    if metadata.bit_depth != BitDepth.PCM_16:
        return _pass_through(buffer, f"{metadata.bit_depth}-bit audio")

    samples = read_samples(buffer, BitDepth.PCM_16)
    num_samples = len(samples)

    loud = np.flatnonzero(np.abs(samples.astype(np.int32)) > threshold)
    if loud.size == 0:
        return _pass_through(buffer, "no samples above threshold")

    start = max(0, int(loud[0]) - PADDING_SAMPLES)
    end = min(num_samples - 1, int(loud[-1]) + PADDING_SAMPLES)

    if start >= end:
        return _pass_through(buffer, "clip too short")

    logger.debug(
        "Trimming to samples [%d, %d) of %d.", start, end, num_samples
    )
    return build_wav(
        encode_samples(samples[start:end], BitDepth.PCM_16),
        metadata.sample_rate,
        metadata.channels,
        metadata.bit_depth,
    )


def _pass_through(buffer: bytes, reason: str) -> bytes:
    """Return ``buffer`` unchanged, recording why trimming was skipped."""
    logger.debug("Silence trim skipped: %s.", reason)
    return buffer
