"""
Typing test session: Application layer orchestrator.

Keeps the previous/current/next line state of a running test, forwards
submitted words to TestStats and checkpoints once per elapsed second.
Time is always supplied by the caller.
"""

import logging
from datetime import timedelta
from enum import Enum

from typetest.domain.constants import DEFAULT_LINE_WIDTH, DEFAULT_TEST_LENGTH_SECONDS
from typetest.domain.words.models import DisplayedWord, WordStatus

from .stats.metrics_calculator import MetricsCalculator, TestSummary
from .stats.typing_stats import TestStats
from .words.word_source import WordSource

logger = logging.getLogger(__name__)


class TestStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"


class TypingTestSession:
    """
    State of one typing test screen, independent of any UI toolkit.
    """

    def __init__(
        self,
        word_source: WordSource,
        stats: TestStats | None = None,
        test_length: timedelta = timedelta(seconds=DEFAULT_TEST_LENGTH_SECONDS),
        line_width: int = DEFAULT_LINE_WIDTH,
        calculator: MetricsCalculator | None = None,
    ):
        """
        Args:
            word_source: Where the words come from.
            stats: Optional statistics instance; a fresh one is created if not provided.
            test_length: How long a timed test lasts.
            line_width: Character budget for each displayed line.
            calculator: Optional custom calculator; uses default if not provided.
        """
        self.word_source = word_source
        self.stats = stats or TestStats()
        self.test_length = test_length
        self.line_width = line_width
        self._calc = calculator or MetricsCalculator()

        self.status = TestStatus.NOT_STARTED
        self.current_pos = 0
        self.current_input = ""
        self.elapsed = timedelta(0)
        self._final_checkpoint_due = False
        self.previous_line: list[DisplayedWord] = []
        self.current_line: list[DisplayedWord] = []
        self.next_line: list[DisplayedWord] = []
        self._fill_lines()

    @property
    def current_word(self) -> DisplayedWord | None:
        if self.current_pos < len(self.current_line):
            return self.current_line[self.current_pos]
        return None

    @property
    def remaining_seconds(self) -> int:
        remaining = self.test_length - self.elapsed
        return max(0, int(remaining.total_seconds()))

    def input_changed(self, text: str) -> None:
        """Updates the live input, starting the test on the first keystroke."""
        if self.status == TestStatus.COMPLETE:
            return

        if self.status == TestStatus.NOT_STARTED:
            self.status = TestStatus.IN_PROGRESS
            self.stats.next_test()
            self.elapsed = timedelta(0)
            logger.debug("Typing test started")

        word = self.current_word
        if word is not None:
            word.status = (
                WordStatus.NOT_TYPED if word.text.startswith(text) else WordStatus.INCORRECT
            )
        self.current_input = text

    def submit_word(self) -> bool | None:
        """
        Submits the current input against the current word.

        Returns whether the word was correct, or None if nothing was submitted.
        """
        word = self.current_word
        if self.status != TestStatus.IN_PROGRESS or not self.current_input or word is None:
            return None

        is_correct = self.stats.submit_word(word.text, self.current_input)
        word.status = WordStatus.CORRECT if is_correct else WordStatus.INCORRECT
        self.current_input = ""
        self.current_pos += 1

        if self.current_pos >= len(self.current_line):
            self._advance_line()
        return is_correct

    def tick(self, elapsed: timedelta) -> None:
        """
        Advances the test clock. Records a checkpoint each time a new whole
        second has passed, and completes the test once its length is reached.

        Time past the end of the test is not counted. The first tick after a
        passage runs out records the passage's final checkpoint.
        """
        elapsed = min(elapsed, self.test_length)
        if self._final_checkpoint_due:
            self._final_checkpoint_due = False
            self.elapsed = max(self.elapsed, elapsed)
            self.stats.checkpoint(self.elapsed)
            return
        if self.status != TestStatus.IN_PROGRESS:
            return

        timed_out = elapsed >= self.test_length
        previous_second = int(self.elapsed.total_seconds())
        self.elapsed = elapsed
        if timed_out or int(elapsed.total_seconds()) != previous_second:
            self.stats.checkpoint(elapsed)

        if timed_out:
            self._complete()

    def redo(self) -> None:
        """Restarts the current test with the same words."""
        self.word_source.prepare_for_retry()
        self._reset()

    def next_test(self) -> None:
        """Starts a new test with fresh words."""
        self.word_source.prepare_for_next_test()
        self._reset()

    def summary(self) -> TestSummary:
        return self._calc.summarize(self.stats, self.elapsed)

    def _advance_line(self) -> None:
        self.previous_line = self.current_line
        self.current_line = self.next_line
        self.next_line = self.word_source.fill_line(self.line_width)
        self.current_pos = 0

        if not self.current_line:
            # Finite source ran out of words
            self._final_checkpoint_due = True
            self._complete()

    def _complete(self) -> None:
        self.status = TestStatus.COMPLETE
        logger.debug(f"Typing test complete after {self.elapsed.total_seconds():.1f}s")

    def _reset(self) -> None:
        self.status = TestStatus.NOT_STARTED
        self._final_checkpoint_due = False
        self.stats.next_test()
        self.current_pos = 0
        self.current_input = ""
        self.elapsed = timedelta(0)
        self.previous_line = []
        self._fill_lines()

    def _fill_lines(self) -> None:
        self.current_line = self.word_source.fill_line(self.line_width)
        self.next_line = self.word_source.fill_line(self.line_width)
