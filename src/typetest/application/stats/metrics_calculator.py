"""
Metrics calculator for summarizing a finished typing test.

This is a pure computation module with no I/O.
"""

import math
from dataclasses import dataclass, field
from datetime import timedelta

from .typing_stats import TestStats


@dataclass
class TestSummary:
    """
    Final statistics of a typing test attempt, with derived metrics.
    """

    elapsed: timedelta
    correct_chars: int
    incorrect_chars: int
    correct_words: int
    incorrect_words: int

    # Computed metrics
    accuracy: float  # NaN if nothing was typed
    effective_wpm: int
    raw_wpm: int

    # (elapsed seconds, effective WPM) for each checkpoint, in order
    wpm_series: list[tuple[float, int]] = field(default_factory=list)
    # (expected word, times missed), most frequent first
    missed_words: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "elapsed_seconds": self.elapsed.total_seconds(),
            "correct_chars": self.correct_chars,
            "incorrect_chars": self.incorrect_chars,
            "correct_words": self.correct_words,
            "incorrect_words": self.incorrect_words,
            "accuracy": None if math.isnan(self.accuracy) else self.accuracy,
            "effective_wpm": self.effective_wpm,
            "raw_wpm": self.raw_wpm,
            "wpm_series": [list(point) for point in self.wpm_series],
            "missed_words": [list(item) for item in self.missed_words],
        }


class MetricsCalculator:
    """
    Computes result summaries from TestStats.

    Stateless and side-effect free.
    """

    def summarize(self, stats: TestStats, elapsed: timedelta | None = None) -> TestSummary:
        """
        Summarize the statistics of an attempt.

        Args:
            stats: The statistics to summarize. Never mutated.
            elapsed: Test duration. Defaults to the latest checkpoint's elapsed
                time, or zero if there are no checkpoints.
        """
        if elapsed is None:
            latest = stats.get_latest_checkpoint()
            elapsed = latest.elapsed if latest else timedelta(0)

        final = stats.snapshot(elapsed)
        return TestSummary(
            elapsed=elapsed,
            correct_chars=final.correct_chars,
            incorrect_chars=final.incorrect_chars,
            correct_words=final.correct_words,
            incorrect_words=final.incorrect_words,
            accuracy=final.accuracy(),
            effective_wpm=final.effective_wpm(),
            raw_wpm=final.raw_wpm(),
            wpm_series=self._compute_wpm_series(stats),
            missed_words=stats.missed_word_counts().most_common(),
        )

    def _compute_wpm_series(self, stats: TestStats) -> list[tuple[float, int]]:
        """
        Effective WPM at each checkpoint, for graphing speed over time.

        Checkpoints at zero elapsed time are skipped since they carry no rate.
        """
        return [
            (checkpoint.elapsed.total_seconds(), checkpoint.effective_wpm())
            for checkpoint in stats.get_checkpoints()
            if checkpoint.elapsed > timedelta(0)
        ]
