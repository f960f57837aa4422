"""
Word Source Factory
Centralizes the logic for selecting the word source for a typing test.
"""

import logging

from typetest.application.config import AppConfig
from typetest.application.words.pools import DEFAULT_WORDS
from typetest.application.words.word_source import WordSource
from typetest.infrastructure.word_pools import load_passage, load_word_pool

logger = logging.getLogger(__name__)


def get_word_source(config: AppConfig) -> WordSource:
    """
    Returns the word source configured for a test.

    A passage file wins over a word pool file; with neither, random words
    are drawn from the built-in pool.
    """
    # 1. Fixed passage
    if config.passage_file:
        logger.debug(f"Using passage from {config.passage_file}")
        return WordSource.passage(load_passage(config.passage_file))

    # 2. Random words from a custom pool
    if config.word_pool_file:
        return WordSource.random(load_word_pool(config.word_pool_file), seed=config.seed)

    # 3. Built-in pool
    return WordSource.random(DEFAULT_WORDS, seed=config.seed)
