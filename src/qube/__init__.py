"""
Qube - static analysis for GDScript

Line-oriented heuristics for file and function length, cyclomatic
complexity, nesting, naming and style, with inline ignore directives and an
aggregate debt score.
"""

__version__ = "0.4.0"

from .config import Config, load_config
from .core import aggregate, analyze, analyze_sources
from .models import AnalysisResult, CheckId, FileResult, FunctionInfo, Issue, Severity

__all__ = [
    "analyze",  # One file, in memory
    "aggregate",
    "analyze_sources",
    "Config",
    "load_config",
    "AnalysisResult",
    "FileResult",
    "FunctionInfo",
    "Issue",
    "CheckId",
    "Severity",
]
