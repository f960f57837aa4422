# Application Words Package
from .pools import DEFAULT_WORDS
from .word_source import FixedPassage, RandomWords, WordSource, WordVariant, default_seed_source

__all__ = [
    "WordSource",
    "WordVariant",
    "RandomWords",
    "FixedPassage",
    "DEFAULT_WORDS",
    "default_seed_source",
]
