"""Scanners: line checks, function metrics and god-class detection."""

from .classes import ClassScanner, ClassScanResult
from .context import ScanContext
from .functions import (
    FUNCTION_CHECKS,
    FunctionScanner,
    FunctionScanResult,
    FunctionSegment,
    cyclomatic_complexity,
    segment_functions,
)
from .lines import LINE_CHECKS, LineScanner, LineScanResult

__all__ = [
    "ScanContext",
    "LineScanner",
    "LineScanResult",
    "LINE_CHECKS",
    "FunctionScanner",
    "FunctionScanResult",
    "FunctionSegment",
    "FUNCTION_CHECKS",
    "cyclomatic_complexity",
    "segment_functions",
    "ClassScanner",
    "ClassScanResult",
]
