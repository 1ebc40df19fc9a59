"""
Log and health analyzers.
"""

from .log_analyzer import LogAnalyzer
from .health import HealthScorer

__all__ = ["LogAnalyzer", "HealthScorer"]
