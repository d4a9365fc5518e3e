# src/pronunciation/__init__.py
# ==============================
# Pronunciation Scoring Layer — LyricPractice
#
# Turns a transcription of the learner's attempt into practice feedback:
#   1. Split the phonetic guide into practice words   (tokenizer.py)
#   2. Normalize text and score by edit distance      (scorer.py)
#   3. Map the score to a tier and feedback copy      (tiers.py)
#   4. Track per-word state across a practice line    (practice.py)
#
# Scoring never raises; empty input degrades to a 0.0 score.

from src.pronunciation.practice import (  # noqa: F401
    PracticeSession,
    PracticeSummary,
    WordPracticeState,
    WordPracticeStatus,
)
from src.pronunciation.scorer import (  # noqa: F401
    calculate_accuracy,
    levenshtein_distance,
    normalize_for_comparison,
)
from src.pronunciation.tiers import (  # noqa: F401
    AccuracyFeedback,
    AccuracyTier,
    accuracy_feedback,
    classify_accuracy,
)
from src.pronunciation.tokenizer import tokenize_phonetic_words  # noqa: F401

__all__ = [
    "AccuracyFeedback",
    "AccuracyTier",
    "PracticeSession",
    "PracticeSummary",
    "WordPracticeState",
    "WordPracticeStatus",
    "accuracy_feedback",
    "calculate_accuracy",
    "classify_accuracy",
    "levenshtein_distance",
    "normalize_for_comparison",
    "tokenize_phonetic_words",
]
