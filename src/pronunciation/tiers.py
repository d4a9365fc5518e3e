"""
src/pronunciation/tiers.py
===========================
Accuracy Classifier — LyricPractice Pronunciation Layer

Maps an accuracy score in [0, 1] to a tier and the feedback copy shown to
the learner. Thresholds are inclusive at their lower bound:

    score >= 0.8          → success
    0.6 <= score < 0.8    → close
    score < 0.6           → retry
"""

import math
from dataclasses import dataclass
from enum import Enum


SUCCESS_THRESHOLD: float = 0.8
CLOSE_THRESHOLD: float = 0.6


class AccuracyTier(str, Enum):
    """Feedback tier for a single scored attempt."""

    SUCCESS = "success"
    CLOSE = "close"
    RETRY = "retry"


@dataclass(frozen=True)
class AccuracyFeedback:
    title: str
    description: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description}


_FEEDBACK_COPY: dict[AccuracyTier, tuple[str, str]] = {
    AccuracyTier.SUCCESS: ("Excellent!", "Great pronunciation!"),
    AccuracyTier.CLOSE: ("Almost there!", "Keep practicing!"),
    AccuracyTier.RETRY: ("Keep trying!", "Listen and try again."),
}


def classify_accuracy(score: float) -> AccuracyTier:
    """Return the tier for ``score``."""
    if score >= SUCCESS_THRESHOLD:
        return AccuracyTier.SUCCESS
    if score >= CLOSE_THRESHOLD:
        return AccuracyTier.CLOSE
    return AccuracyTier.RETRY


def accuracy_percent(score: float) -> int:
    """``score`` as a whole percentage, halves rounded up."""
    return int(math.floor(score * 100 + 0.5))


def accuracy_feedback(score: float) -> AccuracyFeedback:
    """Build the title / description shown after a scored attempt."""
    title, encouragement = _FEEDBACK_COPY[classify_accuracy(score)]
    return AccuracyFeedback(
        title=title,
        description=f"{accuracy_percent(score)}% accurate. {encouragement}",
    )
