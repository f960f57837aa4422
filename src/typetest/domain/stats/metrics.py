"""
Metric formulas shared by checkpoints, live statistics and summaries.

These are pure functions with no I/O or state.
"""

import math

from typetest.domain.constants import CHARS_PER_WORD, SECONDS_PER_MINUTE


def accuracy(correct_chars: int, incorrect_chars: int) -> float:
    """
    Percentage of typed characters that were correct.

    Returns NaN when nothing has been typed yet; the display layer decides
    how to render that.
    """
    total = correct_chars + incorrect_chars
    if total == 0:
        return math.nan
    return correct_chars / total * 100.0


def wpm(chars: int, elapsed_seconds: float) -> int:
    """
    Words per minute for ``chars`` characters typed over ``elapsed_seconds``.

    WPM = chars / 5 / seconds * 60, truncated towards zero.
    Zero elapsed time yields 0 rather than dividing by zero.
    """
    if elapsed_seconds <= 0:
        return 0
    return int(chars * SECONDS_PER_MINUTE / (CHARS_PER_WORD * elapsed_seconds))
