"""
Word sources: produce lines of practice words for a typing test.

A source is one of a closed set of variants:

- ``RandomWords``: infinite, draws uniformly (with replacement) from a pool
  using a seeded RNG, so an attempt can be replayed exactly.
- ``FixedPassage``: finite, replays a passage of text word by word.
"""

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace

from typetest.domain.constants import SEED_BITS, WORD_SEPARATOR
from typetest.domain.errors import EmptyWordPoolError
from typetest.domain.words.models import DisplayedWord

logger = logging.getLogger(__name__)


def default_seed_source() -> int:
    """Draws a seed from the operating system's entropy source."""
    return random.SystemRandom().getrandbits(SEED_BITS)


@dataclass(frozen=True)
class RandomWords:
    pool: tuple[str, ...]


@dataclass
class FixedPassage:
    tokens: tuple[str, ...]
    cursor: int = 0


WordVariant = RandomWords | FixedPassage


class WordSource:
    """
    Fills lines with words from a RandomWords or FixedPassage variant.

    The seed is injected (or drawn from ``seed_source``) and kept so that
    ``prepare_for_retry`` can replay the same sequence of draws.
    """

    def __init__(
        self,
        variant: WordVariant,
        seed: int | None = None,
        seed_source: Callable[[], int] = default_seed_source,
    ):
        match variant:
            case RandomWords(pool=pool) if not pool:
                raise EmptyWordPoolError("Word pool is empty")
            case FixedPassage(tokens=tokens) if not tokens:
                raise EmptyWordPoolError("Passage has no words")

        # A passage cursor belongs to this source, not to the caller's value
        self._variant = replace(variant) if isinstance(variant, FixedPassage) else variant
        self._seed_source = seed_source
        self._seed = seed if seed is not None else seed_source()
        self._rng = random.Random(self._seed)

    @classmethod
    def random(
        cls,
        pool: Iterable[str],
        seed: int | None = None,
        seed_source: Callable[[], int] = default_seed_source,
    ) -> "WordSource":
        return cls(RandomWords(tuple(pool)), seed=seed, seed_source=seed_source)

    @classmethod
    def passage(cls, text: str | Iterable[str]) -> "WordSource":
        tokens = text.split() if isinstance(text, str) else [t for t in text if t]
        return cls(FixedPassage(tuple(tokens)), seed=0)

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def variant(self) -> WordVariant:
        return self._variant

    def is_finite(self) -> bool:
        match self._variant:
            case RandomWords():
                return False
            case FixedPassage():
                return True

    def remaining_words(self) -> int | None:
        """Words left to type for a finite source, None for an infinite one."""
        match self._variant:
            case RandomWords():
                return None
            case FixedPassage(tokens=tokens, cursor=cursor):
                return len(tokens) - cursor

    def prepare_for_retry(self) -> None:
        """Rewinds the source so the next lines repeat the current test exactly."""
        match self._variant:
            case RandomWords():
                self._rng.seed(self._seed)
            case FixedPassage():
                self._variant.cursor = 0
        logger.debug(f"Word source rewound for retry (seed={self._seed})")

    def prepare_for_next_test(self) -> None:
        """Reseeds the source so the next lines are a fresh test."""
        match self._variant:
            case RandomWords():
                self._seed = self._seed_source()
                self._rng.seed(self._seed)
            case FixedPassage():
                # A passage is a single test; the next one starts it over
                self._variant.cursor = 0
        logger.debug(f"Word source prepared for next test (seed={self._seed})")

    def fill_line(self, max_chars: int) -> list[DisplayedWord]:
        """
        Returns a line of words whose total length, separators included,
        does not exceed ``max_chars``.

        The first word is always included, even if it alone is longer than
        ``max_chars``. Only an exhausted passage returns an empty line.
        """
        match self._variant:
            case RandomWords(pool=pool):
                return self._fill_random(pool, max_chars)
            case FixedPassage():
                return self._fill_passage(self._variant, max_chars)

    def _fill_random(self, pool: tuple[str, ...], max_chars: int) -> list[DisplayedWord]:
        line: list[DisplayedWord] = []
        chars = 0
        while True:
            # The overflowing draw is discarded, not saved for the next line,
            # so the draw stream depends only on the seed and the budgets.
            word = pool[self._rng.randrange(len(pool))]
            chars += len(word) + (len(WORD_SEPARATOR) if line else 0)
            if line and chars > max_chars:
                return line
            line.append(DisplayedWord(word))

    def _fill_passage(self, passage: FixedPassage, max_chars: int) -> list[DisplayedWord]:
        line: list[DisplayedWord] = []
        chars = 0
        while passage.cursor < len(passage.tokens):
            word = passage.tokens[passage.cursor]
            chars += len(word) + (len(WORD_SEPARATOR) if line else 0)
            if line and chars > max_chars:
                break
            line.append(DisplayedWord(word))
            passage.cursor += 1
        return line
