"""God-class detection over whole-file counts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from ..models import CheckId, FunctionInfo, Issue, Severity
from .context import ScanContext


@dataclass
class ClassScanResult:
    issues: list[Issue] = field(default_factory=list)
    public_functions: int = 0
    signal_count: int = 0


def god_class_issue(
    ctx: ScanContext, public_functions: int, signal_count: int
) -> Optional[Issue]:
    """One WARNING at line 1 naming every exceeded threshold."""
    max_functions = ctx.config.god_class_functions
    max_signals = ctx.config.god_class_signals

    reasons = []
    if public_functions > max_functions:
        reasons.append(f"{public_functions} public functions (max {max_functions})")
    if signal_count > max_signals:
        reasons.append(f"{signal_count} signals (max {max_signals})")
    if not reasons:
        return None

    return ctx.issue(1, Severity.WARNING, CheckId.GOD_CLASS, "God class: " + ", ".join(reasons))


class ClassScanner:
    """Counts the public surface of a script and flags oversized ones."""

    name = "classes"

    def scan(
        self, ctx: ScanContext, functions: Sequence[FunctionInfo], signals: Sequence[str]
    ) -> ClassScanResult:
        result = ClassScanResult(
            public_functions=sum(1 for fn in functions if fn.is_public),
            signal_count=len(signals),
        )
        if ctx.enabled(CheckId.GOD_CLASS):
            issue = god_class_issue(ctx, result.public_functions, result.signal_count)
            if issue is not None:
                result.issues.append(issue)
        return result
