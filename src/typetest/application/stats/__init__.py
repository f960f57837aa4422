# Application Stats Package
from .metrics_calculator import MetricsCalculator, TestSummary
from .typing_stats import TestStats

__all__ = ["TestStats", "MetricsCalculator", "TestSummary"]
