# Domain Stats Package
from .metrics import accuracy, wpm
from .models import MissedWord, TestCheckpoint

__all__ = ["TestCheckpoint", "MissedWord", "accuracy", "wpm"]
