"""
Loading word pools and passages from files.

Word pools are either plain text (whitespace separated words, lines starting
with '#' ignored) or YAML, holding a list of words or a mapping with a
``words`` list.
"""

import logging
from pathlib import Path

import yaml  # type: ignore

from typetest.domain.errors import EmptyWordPoolError, WordPoolLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_word_pool(path: Path) -> list[str]:
    """
    Load a word pool from a text or YAML file.

    Raises:
        WordPoolLoadError: If the file can't be read or parsed.
        EmptyWordPoolError: If the file contains no words.
    """
    text = read_text_file(path)

    if path.suffix.lower() in YAML_SUFFIXES:
        words = _parse_yaml_pool(path, text)
    else:
        words = _parse_text_pool(text)

    if not words:
        raise EmptyWordPoolError(f"No words found in {path}")

    logger.info(f"Loaded {len(words)} words from {path.name}")
    return words


def load_passage(path: Path) -> str:
    """Load a passage of text to be typed word by word."""
    text = read_text_file(path).strip()
    if not text:
        raise EmptyWordPoolError(f"Passage file {path} is empty")
    logger.info(f"Loaded passage of {len(text.split())} words from {path.name}")
    return text


def read_text_file(path: Path) -> str:
    """Reads a UTF-8 text file, wrapping read and decode errors."""
    try:
        # Handle potential BOM (Byte Order Mark)
        return path.read_text(encoding="utf-8").lstrip("\ufeff")
    except (OSError, UnicodeDecodeError) as e:
        raise WordPoolLoadError(path, str(e)) from e


def _parse_text_pool(text: str) -> list[str]:
    words: list[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        words.extend(stripped.split())
    return words


def _parse_yaml_pool(path: Path, text: str) -> list[str]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise WordPoolLoadError(path, f"invalid YAML: {e}") from e

    if isinstance(data, dict):
        data = data.get("words")
    if data is None:
        return []
    if not isinstance(data, list):
        raise WordPoolLoadError(path, "expected a list of words or a 'words' list")

    words: list[str] = []
    for item in data:
        if item is None:
            continue
        # A single entry can't hold a separator, so split multi-word entries
        parts = str(item).split()
        if len(parts) > 1:
            logger.warning(f"Splitting multi-word entry {item!r} in {path.name}")
        words.extend(parts)
    return words
