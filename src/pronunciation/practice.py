"""
src/pronunciation/practice.py
==============================
Word Practice Session — LyricPractice Pronunciation Layer

Responsibility:
    - Create one practice state per phonetic word when a line is opened
    - Apply each scored attempt (or a no-speech timeout) to the word's state
    - Track the word the learner is currently on
    - Summarize attempts for the practice-stats endpoint

Status rules after a scored attempt:
    success tier        → success (and move on to the next word)
    close / retry tier  → retry

A session lives for one practiced line and is discarded afterwards. It is
not thread-safe; each learner owns their own session.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from src.pronunciation.scorer import calculate_accuracy
from src.pronunciation.tiers import (
    AccuracyFeedback,
    AccuracyTier,
    accuracy_feedback,
    classify_accuracy,
)
from src.pronunciation.tokenizer import tokenize_phonetic_words

logger = logging.getLogger("lyricpractice.pronunciation.practice")


class WordPracticeStatus(str, Enum):
    """Lifecycle status of a single practice word."""

    PENDING = "pending"
    SUCCESS = "success"
    RETRY = "retry"
    SKIPPED = "skipped"


@dataclass
class WordPracticeState:
    word: str
    status: WordPracticeStatus = WordPracticeStatus.PENDING
    attempts: int = 0
    best_score: float = 0.0


@dataclass(frozen=True)
class AttemptResult:
    """Outcome of one scored attempt, for display."""

    word_index: int
    score: float
    tier: AccuracyTier
    feedback: AccuracyFeedback
    advanced: bool


@dataclass(frozen=True)
class PracticeSummary:
    total_words: int
    total_attempts: int
    successful_words: int

    @property
    def should_save(self) -> bool:
        return self.total_attempts > 0


class PracticeSession:
    """
    Per-line, word-by-word pronunciation practice.

    Attributes:
        words:         Practice states, one per phonetic token.
        current_index: Index of the word the learner should say next.
    """

    def __init__(self, words: list[str]):
        if not words:
            raise ValueError("No words found to practice in this line.")
        self.words: list[WordPracticeState] = [WordPracticeState(word=w) for w in words]
        self.current_index: int = 0

    @classmethod
    def start(cls, phonetic_guide: str | None) -> "PracticeSession":
        """
        Open a session for a phonetic guide line.

        Raises:
            ValueError: If the guide yields no words.
        """
        session = cls(tokenize_phonetic_words(phonetic_guide))
        logger.info("Practice session started with %d words.", len(session.words))
        return session

    # ------------------------------------------------------------------
    # Scoring events
    # ------------------------------------------------------------------

    def record_attempt(self, index: int, transcript: str) -> AttemptResult:
        """
        Score ``transcript`` against the word at ``index`` and update its state.

        Raises:
            IndexError: If ``index`` is outside the session.
        """
        state = self._state(index)
        score = calculate_accuracy(state.word, transcript)
        tier = classify_accuracy(score)

        state.status = (
            WordPracticeStatus.SUCCESS if tier is AccuracyTier.SUCCESS
            else WordPracticeStatus.RETRY
        )
        state.attempts += 1
        state.best_score = max(state.best_score, score)

        advanced = tier is AccuracyTier.SUCCESS and self._advance_from(index)

        logger.info(
            "Word %d (%r): score=%.2f tier=%s attempts=%d",
            index, state.word, score, tier.value, state.attempts,
        )
        return AttemptResult(
            word_index=index,
            score=score,
            tier=tier,
            feedback=accuracy_feedback(score),
            advanced=advanced,
        )

    def record_no_speech(self, index: int) -> AttemptResult:
        """Count a listening timeout as a failed attempt without touching best_score."""
        state = self._state(index)
        state.status = WordPracticeStatus.RETRY
        state.attempts += 1

        logger.info("Word %d (%r): no speech detected.", index, state.word)
        return AttemptResult(
            word_index=index,
            score=0.0,
            tier=AccuracyTier.RETRY,
            feedback=accuracy_feedback(0.0),
            advanced=False,
        )

    def skip(self, index: int) -> None:
        state = self._state(index)
        state.status = WordPracticeStatus.SKIPPED
        self._advance_from(index)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    @property
    def is_complete(self) -> bool:
        return all(
            w.status in (WordPracticeStatus.SUCCESS, WordPracticeStatus.SKIPPED)
            for w in self.words
        )

    def summary(self) -> PracticeSummary:
        return PracticeSummary(
            total_words=len(self.words),
            total_attempts=sum(w.attempts for w in self.words),
            successful_words=sum(
                1 for w in self.words if w.status is WordPracticeStatus.SUCCESS
            ),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _state(self, index: int) -> WordPracticeState:
        if not 0 <= index < len(self.words):
            raise IndexError(
                f"Word index {index} out of range (0..{len(self.words) - 1})"
            )
        return self.words[index]

    def _advance_from(self, index: int) -> bool:
        """Move to the word after ``index`` if there is one."""
        if index < len(self.words) - 1:
            self.current_index = index + 1
            return True
        return False
