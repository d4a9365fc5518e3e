"""
src/audio/downmix.py
=====================
Channel Downmixer — LyricPractice Audio Layer

Responsibility:
    - Convert interleaved stereo PCM into mono by averaging left/right
    - Support signed 8-bit and 16-bit little-endian samples
    - Re-emit a canonical WAV header for the mono payload

Averaging uses floor division, so (-3 + 0) / 2 becomes -2, not -1.
Changing this to rounding alters output bytes.
"""

import logging

import numpy as np

from src.audio.wav import (
    AudioMetadata,
    UnsupportedBitDepth,
    UnsupportedChannelLayout,
    build_wav,
    encode_samples,
    read_samples,
    resolve_bit_depth,
)

logger = logging.getLogger("lyricpractice.audio.downmix")


def to_mono(buffer: bytes, metadata: AudioMetadata) -> bytes:
    """
    Downmix a stereo WAV buffer to mono.

    Args:
        buffer:   WAV container bytes.
        metadata: Metadata parsed from ``buffer``.

    Returns:
        ``buffer`` itself when already mono, otherwise a new mono container.

    Raises:
        UnsupportedChannelLayout: If the channel count is not 1 or 2.
        UnsupportedBitDepth:      If samples are neither 8- nor 16-bit.
    """
    if metadata.channels == 1:
        return buffer

    if metadata.channels != 2:
        raise UnsupportedChannelLayout(
            f"Unsupported channel count: {metadata.channels}"
        )

    depth = resolve_bit_depth(metadata.bit_depth)
    if depth is None:
        raise UnsupportedBitDepth(
            f"Unsupported bit depth for downmix: {metadata.bit_depth}"
        )

    samples = read_samples(buffer, depth)
    frames = len(samples) // 2
    stereo = samples[: frames * 2].astype(np.int32).reshape(frames, 2)
    mono = (stereo[:, 0] + stereo[:, 1]) // 2

    logger.debug(
        "Downmixed %d stereo frames (%d-bit) to mono.", frames, depth.value
    )
    return build_wav(
        encode_samples(mono, depth),
        metadata.sample_rate,
        1,
        metadata.bit_depth,
    )
