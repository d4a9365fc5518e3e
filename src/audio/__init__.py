# src/audio/__init__.py
# ======================
# Audio Processing Layer — LyricPractice
#
# Prepares a spoken-word recording for the pronunciation-assessment API:
#   1. Parse / validate the RIFF/WAVE container      (wav.py)
#   2. Downmix stereo to mono                         (downmix.py)
#   3. Resample to 16 kHz                             (resampler.py)
#   4. Trim leading / trailing silence                (silence.py)
#   5. Orchestrate the above and report compression   (optimizer.py)
#   6. Check the API's hard format requirements       (validator.py)
#
# Every stage is a pure function bytes -> bytes.
#
# Public API:
#   optimize_audio(base64_or_bytes) → OptimizationResult
#   validate_audio(buffer)          → ValidationOutcome

from src.audio.optimizer import (  # noqa: F401
    OptimizationResult,
    decode_base64_audio,
    optimize_audio,
)
from src.audio.validator import ValidationOutcome, validate_audio  # noqa: F401
from src.audio.wav import (  # noqa: F401
    AudioMetadata,
    AudioProcessingError,
    BitDepth,
    MalformedContainer,
    UnsupportedBitDepth,
    UnsupportedChannelLayout,
    parse_header,
    write_header,
)

__all__ = [
    "AudioMetadata",
    "AudioProcessingError",
    "BitDepth",
    "MalformedContainer",
    "OptimizationResult",
    "UnsupportedBitDepth",
    "UnsupportedChannelLayout",
    "ValidationOutcome",
    "decode_base64_audio",
    "optimize_audio",
    "parse_header",
    "validate_audio",
    "write_header",
]
