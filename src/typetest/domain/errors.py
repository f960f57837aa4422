"""Error types raised when a caller breaks a precondition of the core."""


class TypetestError(Exception):
    """Base class for all typetest errors."""


class EmptyWordPoolError(TypetestError, ValueError):
    """Raised when a word source is built from an empty pool or passage."""


class WordPoolLoadError(TypetestError):
    """Raised when a word pool, passage or typed text file cannot be read or parsed."""

    def __init__(self, path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read {path}: {reason}")
