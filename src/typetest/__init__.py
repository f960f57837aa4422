"""typetest: typing-speed test statistics and practice-word generation."""

__version__ = "0.1.0"
