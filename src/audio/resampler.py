"""
src/audio/resampler.py
=======================
Linear Resampler — LyricPractice Audio Layer

Responsibility:
    - Convert 16-bit PCM between sample rates using two-tap linear
      interpolation
    - Re-emit a canonical WAV header at the target rate

This is not a band-limited resampler. Downsampling aliases; that is accepted
so output stays byte-identical with previously optimized recordings.

This module does NOT:
    - Downmix channels (run src.audio.downmix first)
    - Resample 8-bit audio (raises UnsupportedBitDepth)
"""

import logging

import numpy as np

from src.audio.wav import (
    AudioMetadata,
    BitDepth,
    UnsupportedBitDepth,
    build_wav,
    encode_samples,
    read_samples,
)

logger = logging.getLogger("lyricpractice.audio.resampler")


def resample(buffer: bytes, metadata: AudioMetadata, target_rate: int) -> bytes:
    """
    Resample a WAV buffer to ``target_rate``.

    For every output index ``i`` the source position is ``i * ratio`` where
    ``ratio = input_samples / output_samples``; the output sample is the
    floor of the linear blend between the two neighbouring input samples.

    Args:
        buffer:      WAV container bytes.
        metadata:    Metadata parsed from ``buffer``.
        target_rate: Desired sample rate in Hz.

    Returns:
        ``buffer`` itself when the rate already matches, otherwise a new
        container at ``target_rate``.

    Raises:
        UnsupportedBitDepth: If the buffer is not 16-bit PCM.
    """
    if metadata.sample_rate == target_rate:
        return buffer

    if metadata.bit_depth != BitDepth.PCM_16:
        raise UnsupportedBitDepth(
            f"Resampling requires 16-bit PCM (got {metadata.bit_depth}-bit)"
        )

    samples = read_samples(buffer, BitDepth.PCM_16)
    input_samples = len(samples)
    output_samples = (input_samples * target_rate) // metadata.sample_rate

    if output_samples == 0:
        logger.debug("Resample produced no samples (input=%d).", input_samples)
        return build_wav(b"", target_rate, metadata.channels, metadata.bit_depth)

    ratio = input_samples / output_samples
    src_index = np.arange(output_samples, dtype=np.float64) * ratio
    lo = np.minimum(np.floor(src_index).astype(np.int64), input_samples - 1)
    hi = np.minimum(lo + 1, input_samples - 1)
    fraction = src_index - lo

    source = samples.astype(np.float64)
    interpolated = np.floor(source[lo] + (source[hi] - source[lo]) * fraction)

    logger.debug(
        "Resampled %d → %d samples (%d Hz → %d Hz).",
        input_samples, output_samples, metadata.sample_rate, target_rate,
    )
    return build_wav(
        encode_samples(interpolated.astype(np.int16), BitDepth.PCM_16),
        target_rate,
        metadata.channels,
        metadata.bit_depth,
    )
