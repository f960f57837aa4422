"""Domain models for words shown during a typing test."""

from dataclasses import dataclass
from enum import Enum


class WordStatus(Enum):
    """The statuses a displayed word can be in during a typing test."""

    NOT_TYPED = "not_typed"
    CORRECT = "correct"
    INCORRECT = "incorrect"


@dataclass
class DisplayedWord:
    """A word drawn for presentation. Its status is updated in place as the user types."""

    text: str
    status: WordStatus = WordStatus.NOT_TYPED
