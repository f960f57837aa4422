"""
Typing test statistics.

Consumes submitted words (expected vs. actually typed) and accumulates
character/word counts, a log of missed words and periodic checkpoints.
"""

import logging
import time
from collections import Counter
from collections.abc import Callable
from datetime import timedelta

from typetest.domain.stats import metrics
from typetest.domain.stats.models import MissedWord, TestCheckpoint

logger = logging.getLogger(__name__)


class TestStats:
    """
    Statistics for a single typing test attempt.

    Elapsed time is measured against an injected monotonic clock, or passed
    in directly by the caller, so the stats never read the wall clock on
    their own.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._test_start = clock()
        self._checkpoints: list[TestCheckpoint] = []
        self._missed_words: list[MissedWord] = []

        self._correct_chars = 0
        self._incorrect_chars = 0
        self._correct_words = 0
        self._incorrect_words = 0

    @property
    def correct_chars(self) -> int:
        return self._correct_chars

    @property
    def incorrect_chars(self) -> int:
        return self._incorrect_chars

    @property
    def correct_words(self) -> int:
        return self._correct_words

    @property
    def incorrect_words(self) -> int:
        return self._incorrect_words

    @property
    def total_chars(self) -> int:
        return self._correct_chars + self._incorrect_chars

    def get_missed_words(self) -> tuple[MissedWord, ...]:
        """Missed words in the order they were typed."""
        return tuple(self._missed_words)

    def missed_word_counts(self) -> Counter[str]:
        """How many times each expected word was missed."""
        return Counter(missed.expected for missed in self._missed_words)

    def get_checkpoints(self) -> tuple[TestCheckpoint, ...]:
        return tuple(self._checkpoints)

    def get_latest_checkpoint(self) -> TestCheckpoint | None:
        return self._checkpoints[-1] if self._checkpoints else None

    def elapsed(self) -> timedelta:
        """Time since the current attempt started, according to the clock."""
        return timedelta(seconds=self._clock() - self._test_start)

    def next_test(self) -> None:
        """Clears all statistics and starts timing a new attempt."""
        self._test_start = self._clock()
        self._checkpoints.clear()
        self._missed_words.clear()

        self._correct_chars = 0
        self._incorrect_chars = 0
        self._correct_words = 0
        self._incorrect_words = 0
        logger.debug("Statistics reset for a new attempt")

    reset = next_test

    def submit_word(self, expected: str, actual: str) -> bool:
        """
        Submits a word, returning whether it was typed correctly.

        Neither word may contain the word separator. An empty expected word
        is ignored and counts as not correct.
        """
        if not expected:
            return False

        if expected == actual:
            # +1 for the separator that ended the word
            self._correct_chars += len(expected) + 1
            self._correct_words += 1
            return True

        self._incorrect_words += 1
        self._missed_words.append(MissedWord(expected, actual))

        for expected_char, actual_char in zip(expected, actual):
            if expected_char == actual_char:
                self._correct_chars += 1
            else:
                self._incorrect_chars += 1

        # Equal lengths mean the separator was placed correctly; otherwise
        # it was misplaced and there are missing or extra characters.
        length_diff = abs(len(expected) - len(actual))
        if length_diff == 0:
            self._correct_chars += 1
        else:
            self._incorrect_chars += 1 + length_diff

        return False

    def snapshot(self, elapsed: timedelta | None = None) -> TestCheckpoint:
        """Builds a checkpoint of the live counters without recording it."""
        if elapsed is None:
            elapsed = self.elapsed()
        return TestCheckpoint(
            elapsed=elapsed,
            correct_chars=self._correct_chars,
            incorrect_chars=self._incorrect_chars,
            correct_words=self._correct_words,
            incorrect_words=self._incorrect_words,
        )

    def checkpoint(self, elapsed: timedelta | None = None) -> TestCheckpoint:
        """
        Records a checkpoint of the current statistics.

        Args:
            elapsed: Time since the test started. Read from the clock if omitted.

        Raises:
            ValueError: If ``elapsed`` is earlier than the latest checkpoint.
        """
        checkpoint = self.snapshot(elapsed)
        latest = self.get_latest_checkpoint()
        if latest is not None and checkpoint.elapsed < latest.elapsed:
            raise ValueError(
                f"Checkpoint elapsed time went backwards: "
                f"{checkpoint.elapsed} < {latest.elapsed}"
            )

        self._checkpoints.append(checkpoint)
        logger.debug(
            f"Checkpoint at {checkpoint.elapsed.total_seconds():.1f}s: "
            f"{checkpoint.correct_chars} correct / {checkpoint.incorrect_chars} incorrect chars"
        )
        return checkpoint

    def accuracy(self) -> float:
        return metrics.accuracy(self._correct_chars, self._incorrect_chars)

    def effective_wpm(self, elapsed: timedelta) -> int:
        return metrics.wpm(self._correct_chars, elapsed.total_seconds())

    def raw_wpm(self, elapsed: timedelta) -> int:
        return metrics.wpm(self.total_chars, elapsed.total_seconds())
