"""
src/pronunciation/scorer.py
============================
Edit-Distance Pronunciation Scorer — LyricPractice Pronunciation Layer

Responsibility:
    - Canonicalize expected / transcribed text for comparison
    - Compute Levenshtein distance between the canonical forms
    - Turn the distance into a similarity score in [0, 1]

Comparison works on a no-space skeleton: "Por  las!" and "porlas" are equal.
This is character-level similarity, not phoneme alignment.

This module does NOT:
    - Call any speech or transcription API
    - Classify scores into tiers (see tiers.py)
    - Raise on malformed input — empty text degrades to a 0.0 score
"""

import logging
import re

logger = logging.getLogger("lyricpractice.pronunciation.scorer")


_DISALLOWED_CHARS: re.Pattern[str] = re.compile(r"[^\w\s-]")
_WHITESPACE: re.Pattern[str] = re.compile(r"\s+")


def normalize_for_comparison(text: str | None) -> str:
    """
    Canonicalize ``text`` for scoring.

    Steps (in order):
        1. Lowercase
        2. Drop everything except word characters, whitespace and hyphens
        3. Remove all whitespace
    """
    if not text:
        return ""

    result = _DISALLOWED_CHARS.sub("", text.lower())
    return _WHITESPACE.sub("", result)


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum number of single-character edits turning ``a`` into ``b``."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(previous[j - 1], current[j - 1], previous[j]) + 1
                )
        previous = current

    return previous[-1]


def calculate_accuracy(expected: str | None, actual: str | None) -> float:
    """
    Similarity between ``expected`` and ``actual`` in [0, 1].

    Returns:
        0.0 when both normalize to empty, 1.0 when they normalize equal,
        otherwise ``1 - distance / max(len_expected, len_actual)`` floored
        at 0.
    """
    normalized_expected = normalize_for_comparison(expected)
    normalized_actual = normalize_for_comparison(actual)

    max_length = max(len(normalized_expected), len(normalized_actual))
    if max_length == 0:
        return 0.0

    if normalized_expected == normalized_actual:
        return 1.0

    distance = levenshtein_distance(normalized_expected, normalized_actual)
    score = max(0.0, 1 - distance / max_length)

    logger.debug(
        "Accuracy %r vs %r: distance=%d, score=%.3f",
        normalized_expected, normalized_actual, distance, score,
    )
    return score
