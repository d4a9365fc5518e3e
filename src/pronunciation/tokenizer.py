"""
src/pronunciation/tokenizer.py
===============================
Phonetic Guide Tokenizer — LyricPractice Pronunciation Layer

Splits a phonetic guide line into the words a learner practices one by one.
Whitespace separates words; hyphens join the syllables of a single word.

    "soos-peerahn-doh pohr lahs" → ["soos-peerahn-doh", "pohr", "lahs"]
"""

import re

# Placeholder shown for lines without a phonetic guide.
NO_GUIDE_SENTINEL: str = "—"

_WHITESPACE: re.Pattern[str] = re.compile(r"\s+")


def tokenize_phonetic_words(phonetic_guide: str | None) -> list[str]:
    """Return the practice words of ``phonetic_guide`` (empty for no guide)."""
    if not phonetic_guide or phonetic_guide == NO_GUIDE_SENTINEL:
        return []

    return [word for word in _WHITESPACE.split(phonetic_guide.strip()) if word]
