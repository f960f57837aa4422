"""
Domain models for typing test statistics.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass
from datetime import timedelta

from . import metrics


@dataclass(frozen=True)
class TestCheckpoint:
    """
    Snapshot of cumulative statistics at a point in a typing test.

    Attributes:
        elapsed: Time since the test started.
        correct_chars: Correctly typed characters, separators included.
        incorrect_chars: Wrong, missing or extra characters.
        correct_words: Words typed exactly as expected.
        incorrect_words: Words with at least one mistake.
    """

    elapsed: timedelta
    correct_chars: int = 0
    incorrect_chars: int = 0
    correct_words: int = 0
    incorrect_words: int = 0

    @property
    def total_chars(self) -> int:
        return self.correct_chars + self.incorrect_chars

    def accuracy(self) -> float:
        """Accuracy as a percentage (NaN if nothing was typed)."""
        return metrics.accuracy(self.correct_chars, self.incorrect_chars)

    def effective_wpm(self) -> int:
        """WPM counting only correct characters. Uses 1 word = 5 characters."""
        return metrics.wpm(self.correct_chars, self.elapsed.total_seconds())

    def raw_wpm(self) -> int:
        """WPM counting every typed character. Uses 1 word = 5 characters."""
        return metrics.wpm(self.total_chars, self.elapsed.total_seconds())


@dataclass(frozen=True)
class MissedWord:
    """A word that was typed incorrectly, and what was typed instead."""

    expected: str
    actual: str
