"""Per-call scan context threaded through every scanner."""

from __future__ import annotations

from dataclasses import dataclass

from ..config import Config
from ..models import CheckId, Issue, Severity
from .syntax import split_lines


@dataclass(frozen=True)
class ScanContext:
    """Read-only view of one file for a single analysis call.

    Scanners never store state between calls; everything they need about
    the file being scanned comes from here.
    """

    file_path: str
    lines: tuple[str, ...]
    config: Config

    @classmethod
    def from_source(cls, source_text: str, file_path: str, config: Config) -> "ScanContext":
        return cls(file_path=file_path, lines=tuple(split_lines(source_text)), config=config)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def enabled(self, check_id: CheckId) -> bool:
        return self.config.is_enabled(check_id)

    def issue(self, line: int, severity: Severity, check_id: CheckId, message: str) -> Issue:
        return Issue(
            file_path=self.file_path,
            line=line,
            severity=severity,
            check_id=check_id,
            message=message,
        )
