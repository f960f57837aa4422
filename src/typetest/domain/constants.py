"""Centralized constants for typetest.

All magic numbers and configuration defaults live here so every layer
imports from a single source of truth.
"""

# ---------- Statistics ----------
CHARS_PER_WORD = 5  # 1 word = 5 characters
SECONDS_PER_MINUTE = 60
WORD_SEPARATOR = " "

# ---------- Word generation ----------
DEFAULT_LINE_WIDTH = 80
SEED_BITS = 64

# ---------- Typing test ----------
DEFAULT_TEST_LENGTH_SECONDS = 60
