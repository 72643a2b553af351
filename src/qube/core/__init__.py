"""Analysis engine: per-file orchestration and run aggregation."""

from .aggregate import aggregate, analyze_sources
from .analyzer import FileAnalyzer, analyze, debt_score, split_suppressed

__all__ = [
    "analyze",
    "aggregate",
    "analyze_sources",
    "debt_score",
    "split_suppressed",
    "FileAnalyzer",
]
