"""
src/audio/wav.py
=================
WAV Container Codec — LyricPractice Audio Layer

Responsibility:
    - Parse and validate a canonical RIFF/WAVE header (44 bytes)
    - Extract format metadata (sample rate, channels, bit depth, duration)
    - Serialize fresh canonical headers for derived PCM buffers
    - Expose the PCM payload as a numpy sample array for downstream stages

Header layout (little-endian, offsets in bytes):
    0   "RIFF"          4   ChunkSize (36 + data)   8   "WAVE"
    12  "fmt "          16  Subchunk1Size (16)      20  AudioFormat (1 = PCM)
    22  NumChannels     24  SampleRate              28  ByteRate
    32  BlockAlign      34  BitsPerSample
    36  "data"          40  Subchunk2Size

This module does NOT:
    - Decode compressed formats (mp3, aac, opus, ...)
    - Walk optional chunks (LIST, fact, ...) — the header is assumed canonical
    - Modify audio content
"""

import logging
import struct
from dataclasses import dataclass
from enum import Enum

import numpy as np

logger = logging.getLogger("lyricpractice.audio.wav")


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HEADER_SIZE: int = 44
PCM_FORMAT_TAG: int = 1

_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class AudioProcessingError(Exception):
    """Base class for fatal errors raised while processing a recording."""
    pass


class MalformedContainer(AudioProcessingError):
    """Raised when a buffer is too short or lacks the RIFF/WAVE magic bytes."""
    pass


class UnsupportedChannelLayout(AudioProcessingError):
    """Raised when a stage receives a channel count it cannot handle."""
    pass


class UnsupportedBitDepth(AudioProcessingError):
    """Raised when a stage receives a sample width it does not implement."""
    pass


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


class BitDepth(int, Enum):
    """Sample widths the pipeline knows how to interpret."""

    PCM_8 = 8
    PCM_16 = 16

    @property
    def bytes_per_sample(self) -> int:
        return self.value // 8

    @property
    def dtype(self) -> np.dtype:
        # 8-bit samples are read as signed to keep parity with cached audio.
        return np.dtype("i1") if self is BitDepth.PCM_8 else np.dtype("<i2")


@dataclass(frozen=True)
class AudioMetadata:
    """
    Format metadata derived from a WAV header.

    Attributes:
        sample_rate:      Samples per second per channel.
        channels:         Interleaved channel count.
        bit_depth:        Bits per sample.
        duration_seconds: Payload bytes divided by the byte rate.
        size_bytes:       Total container size (header + payload).
    """

    sample_rate: int
    channels: int
    bit_depth: int
    duration_seconds: float
    size_bytes: int

    @property
    def data_bytes(self) -> int:
        return self.size_bytes - HEADER_SIZE

    def to_dict(self) -> dict[str, float | int]:
        return {
            "sample_rate": self.sample_rate,
            "channels": self.channels,
            "bit_depth": self.bit_depth,
            "duration_seconds": self.duration_seconds,
            "size_bytes": self.size_bytes,
        }


# ---------------------------------------------------------------------------
# Header parsing / serialization
# ---------------------------------------------------------------------------


def parse_header(buffer: bytes) -> AudioMetadata:
    """
    Read format metadata from a canonical WAV header.

    Args:
        buffer: Complete WAV container bytes.

    Returns:
        AudioMetadata with duration and size derived from the buffer length.

    Raises:
        MalformedContainer: If the buffer is shorter than 44 bytes or the
            RIFF / WAVE identifiers are missing.
    """
    if len(buffer) < HEADER_SIZE:
        raise MalformedContainer("Invalid WAV file: too small")

    if bytes(buffer[0:4]) != b"RIFF":
        raise MalformedContainer("Invalid WAV file: missing RIFF header")

    if bytes(buffer[8:12]) != b"WAVE":
        raise MalformedContainer("Invalid WAV file: missing WAVE format")

    (channels,) = struct.unpack_from("<H", buffer, 22)
    (sample_rate,) = struct.unpack_from("<I", buffer, 24)
    (bit_depth,) = struct.unpack_from("<H", buffer, 34)

    data_bytes = len(buffer) - HEADER_SIZE
    byte_rate = sample_rate * channels * (bit_depth / 8)
    duration = data_bytes / byte_rate if byte_rate > 0 else 0.0

    return AudioMetadata(
        sample_rate=sample_rate,
        channels=channels,
        bit_depth=bit_depth,
        duration_seconds=duration,
        size_bytes=len(buffer),
    )


def write_header(
    data_size: int,
    sample_rate: int,
    channels: int,
    bit_depth: int,
) -> bytes:
    """Build a canonical 44-byte PCM WAV header for ``data_size`` payload bytes."""
    bytes_per_sample = bit_depth // 8
    return _HEADER_STRUCT.pack(
        b"RIFF",
        36 + data_size,
        b"WAVE",
        b"fmt ",
        16,
        PCM_FORMAT_TAG,
        channels,
        sample_rate,
        sample_rate * channels * bytes_per_sample,
        channels * bytes_per_sample,
        bit_depth,
        b"data",
        data_size,
    )


def build_wav(payload: bytes, sample_rate: int, channels: int, bit_depth: int) -> bytes:
    """Wrap a PCM payload in a fresh canonical header."""
    return write_header(len(payload), sample_rate, channels, bit_depth) + payload


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------


def resolve_bit_depth(bits: int) -> BitDepth | None:
    """Return the BitDepth variant for ``bits``, or None when unsupported."""
    try:
        return BitDepth(bits)
    except ValueError:
        return None


def pcm_payload(buffer: bytes) -> bytes:
    """Return the PCM bytes following the canonical header."""
    return bytes(buffer[HEADER_SIZE:])


def read_samples(buffer: bytes, depth: BitDepth) -> np.ndarray:
    """
    Decode the payload into a signed integer sample array.

    A trailing partial sample (odd byte count for 16-bit audio) is dropped.
    """
    payload = pcm_payload(buffer)
    usable = len(payload) - (len(payload) % depth.bytes_per_sample)
    return np.frombuffer(payload[:usable], dtype=depth.dtype)


def encode_samples(samples: np.ndarray, depth: BitDepth) -> bytes:
    """Encode an integer sample array back to little-endian PCM bytes."""
    return np.ascontiguousarray(samples, dtype=depth.dtype).tobytes()
