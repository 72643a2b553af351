"""Data models for Qube: severities, check identifiers, issues and results."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List


class Severity(IntEnum):
    """Ordered issue severity: INFO < WARNING < CRITICAL."""

    INFO = 0
    WARNING = 1
    CRITICAL = 2

    @property
    def label(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.label


class CheckId(str, Enum):
    """Stable check identifiers.

    Ignore-directive authors and external formatters key off these exact
    strings, so values must never change.
    """

    FILE_LENGTH = "file-length"
    LONG_FUNCTION = "long-function"
    HIGH_COMPLEXITY = "high-complexity"
    TOO_MANY_PARAMS = "too-many-params"
    DEEP_NESTING = "deep-nesting"
    EMPTY_FUNCTION = "empty-function"
    MISSING_RETURN_TYPE = "missing-return-type"
    GOD_CLASS = "god-class"
    LONG_LINE = "long-line"
    TODO_COMMENT = "todo-comment"
    PRINT_STATEMENT = "print-statement"
    MAGIC_NUMBER = "magic-number"
    COMMENTED_CODE = "commented-code"
    MISSING_TYPE_HINT = "missing-type-hint"
    NAMING_CONVENTION = "naming-convention"

    def __str__(self) -> str:
        return self.value

    @property
    def toggle(self) -> str:
        """Name of the Config field that enables this check."""
        return "check_" + self.value.replace("-", "_")


@dataclass(frozen=True)
class Issue:
    """A single reported problem. Never mutated after creation."""

    file_path: str
    line: int
    severity: Severity
    check_id: CheckId
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file_path,
            "line": self.line,
            "severity": self.severity.label,
            "check_id": self.check_id.value,
            "message": self.message,
        }


@dataclass(frozen=True)
class FunctionInfo:
    """Metrics for one function body."""

    name: str = ""
    start_line: int = 0
    line_count: int = 0
    param_count: int = 0
    max_nesting: int = 0
    complexity: int = 1
    is_empty: bool = False
    has_return_type: bool = False

    @property
    def is_public(self) -> bool:
        return not self.name.startswith("_")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "start_line": self.start_line,
            "line_count": self.line_count,
            "param_count": self.param_count,
            "max_nesting": self.max_nesting,
            "complexity": self.complexity,
            "is_empty": self.is_empty,
            "has_return_type": self.has_return_type,
        }


@dataclass
class FileResult:
    """Per-file analysis output."""

    file_path: str
    line_count: int
    issues: List[Issue] = field(default_factory=list)
    ignored_issues: List[Issue] = field(default_factory=list)
    functions: List[FunctionInfo] = field(default_factory=list)
    signals: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    export_count: int = 0
    debt_score: int = 0
    # Lines holding ignore directives that could not be matched
    unmatched_directives: List[int] = field(default_factory=list)

    @property
    def public_function_count(self) -> int:
        return sum(1 for fn in self.functions if fn.is_public)

    def issues_for(self, check_id: CheckId) -> List[Issue]:
        return [issue for issue in self.issues if issue.check_id == check_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file_path,
            "line_count": self.line_count,
            "debt_score": self.debt_score,
            "issues": [i.to_dict() for i in self.issues],
            "ignored_issues": [i.to_dict() for i in self.ignored_issues],
            "functions": [fn.to_dict() for fn in self.functions],
            "signals": list(self.signals),
            "dependencies": list(self.dependencies),
            "export_count": self.export_count,
            "unmatched_directives": list(self.unmatched_directives),
        }


@dataclass
class AnalysisResult:
    """Run-level aggregate of many FileResults."""

    files: List[FileResult] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)
    ignored_issues: List[Issue] = field(default_factory=list)
    files_analyzed: int = 0
    lines_analyzed: int = 0
    elapsed_seconds: float = 0.0

    def _count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    @property
    def critical_count(self) -> int:
        return self._count(Severity.CRITICAL)

    @property
    def warning_count(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def info_count(self) -> int:
        return self._count(Severity.INFO)

    @property
    def total_debt_score(self) -> int:
        return sum(fr.debt_score for fr in self.files)

    @property
    def exit_code(self) -> int:
        """2 if any CRITICAL issue, 1 if any WARNING, else 0."""
        if self.critical_count:
            return 2
        if self.warning_count:
            return 1
        return 0

    def issues_by_check(self) -> Dict[str, int]:
        counts = Counter(issue.check_id.value for issue in self.issues)
        return dict(sorted(counts.items()))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "files_analyzed": self.files_analyzed,
            "lines_analyzed": self.lines_analyzed,
            "elapsed_seconds": round(self.elapsed_seconds, 4),
            "critical": self.critical_count,
            "warning": self.warning_count,
            "info": self.info_count,
            "debt_score": self.total_debt_score,
            "exit_code": self.exit_code,
            "issues_by_check": self.issues_by_check(),
            "files": [fr.to_dict() for fr in self.files],
        }
