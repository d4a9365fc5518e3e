"""
src/audio/validator.py
=======================
Speech-API Format Validator — LyricPractice Audio Layer

Responsibility:
    - Check a WAV buffer against the pronunciation-assessment API's hard
      input requirements (16 kHz, mono, 16-bit PCM, 0.1 s – 30 s)
    - Report every violated constraint at once

Validation failures are returned, never raised. A malformed header is the
one case that stops checking early, since no other field can be trusted.
"""

import logging
from dataclasses import dataclass, field

from src.audio.wav import MalformedContainer, parse_header

logger = logging.getLogger("lyricpractice.audio.validator")


# ---------------------------------------------------------------------------
# Target constraints
# ---------------------------------------------------------------------------

REQUIRED_SAMPLE_RATE: int = 16000
REQUIRED_CHANNELS: int = 1
REQUIRED_BIT_DEPTH: int = 16
MIN_DURATION_SECONDS: float = 0.1
MAX_DURATION_SECONDS: float = 30.0


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validate_audio()."""

    valid: bool
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"valid": self.valid, "errors": list(self.errors)}


def validate_audio(buffer: bytes) -> ValidationOutcome:
    """
    Validate ``buffer`` against the speech-assessment format.

    Args:
        buffer: WAV container bytes.

    Returns:
        ValidationOutcome listing one human-readable message per violation.
    """
    errors: list[str] = []

    try:
        metadata = parse_header(buffer)
    except MalformedContainer as exc:
        errors.append(str(exc))
        logger.warning("Audio validation failed: %s", exc)
        return ValidationOutcome(valid=False, errors=errors)

    if metadata.sample_rate != REQUIRED_SAMPLE_RATE:
        errors.append(
            f"Sample rate must be 16kHz (got {metadata.sample_rate}Hz)"
        )

    if metadata.channels != REQUIRED_CHANNELS:
        errors.append(f"Must be mono audio (got {metadata.channels} channels)")

    if metadata.bit_depth != REQUIRED_BIT_DEPTH:
        errors.append(
            f"Bit depth must be 16-bit (got {metadata.bit_depth}-bit)"
        )

    if metadata.duration_seconds > MAX_DURATION_SECONDS:
        errors.append(
            f"Audio too long for REST API ({metadata.duration_seconds:.1f}s, max 30s)"
        )

    if metadata.duration_seconds < MIN_DURATION_SECONDS:
        errors.append(
            f"Audio too short ({metadata.duration_seconds:.2f}s, min 0.1s)"
        )

    if errors:
        logger.warning("Audio validation found %d issue(s): %s", len(errors), errors)

    return ValidationOutcome(valid=not errors, errors=errors)
