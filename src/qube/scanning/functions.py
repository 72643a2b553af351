"""Function scanner: segments a file into functions and measures each one.

A function starts at a line whose trimmed text begins with ``func`` (or
``static func``) and runs until the next declaration or end of file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional, Sequence

from ..config import Config
from ..models import CheckId, FunctionInfo, Issue, Severity
from . import syntax
from .context import ScanContext


@dataclass(frozen=True)
class FunctionSegment:
    """Raw lines of one function: signature plus body."""

    start_line: int
    signature: str
    body: tuple[str, ...]


@dataclass
class FunctionScanResult:
    functions: list[FunctionInfo] = field(default_factory=list)
    issues: list[Issue] = field(default_factory=list)


def segment_functions(lines: Sequence[str]) -> list[FunctionSegment]:
    segments: list[FunctionSegment] = []
    start: Optional[int] = None
    body: list[str] = []

    for number, raw in enumerate(lines, start=1):
        if syntax.is_function_declaration(raw.strip()):
            if start is not None:
                segments.append(FunctionSegment(start, lines[start - 1], tuple(body)))
            start = number
            body = []
        elif start is not None:
            body.append(raw)

    if start is not None:
        segments.append(FunctionSegment(start, lines[start - 1], tuple(body)))
    return segments


def max_nesting(body: Sequence[str]) -> int:
    """Deepest indentation level relative to the first non-blank body line."""
    base: Optional[int] = None
    deepest = 0
    for raw in body:
        if not raw.strip():
            continue
        level = syntax.indent_level(raw)
        if base is None:
            base = level
        deepest = max(deepest, level - base)
    return deepest


def is_empty_body(segment: FunctionSegment) -> bool:
    statements = [raw.strip() for raw in segment.body if raw.strip()]
    inline = syntax.inline_body(segment.signature)
    if inline is not None:
        statements.append(inline)
    return all(statement == syntax.NOOP_KEYWORD for statement in statements)


@dataclass
class _OpenMatch:
    columns: int
    arm_columns: Optional[int] = None
    arms: int = 0


def cyclomatic_complexity(body: Sequence[str], count_match_arms: bool = False) -> int:
    """1 plus one point per decision on every non-comment line.

    ``match`` counts once. With *count_match_arms* every arm after the
    first adds a point as well.
    """
    complexity = 1
    open_matches: list[_OpenMatch] = []

    for raw in body:
        trimmed = raw.strip()
        if not trimmed or syntax.is_comment(trimmed):
            continue
        code = syntax.code_portion(trimmed)
        if not code:
            continue

        if count_match_arms:
            columns = syntax.indent_columns(raw)
            while open_matches and columns <= open_matches[-1].columns:
                open_matches.pop()
            if open_matches:
                current = open_matches[-1]
                if current.arm_columns is None:
                    current.arm_columns = columns
                if columns == current.arm_columns:
                    current.arms += 1
                    if current.arms > 1:
                        complexity += 1
                    complexity += syntax.branch_points(code)
                    continue
            if syntax.starts_match(code):
                open_matches.append(_OpenMatch(columns))

        complexity += syntax.branch_points(code)

    return complexity


def measure(segment: FunctionSegment, config: Config) -> FunctionInfo:
    signature = segment.signature
    return FunctionInfo(
        name=syntax.function_name(signature),
        start_line=segment.start_line,
        line_count=len(segment.body) + 1,
        param_count=syntax.count_parameters(signature),
        max_nesting=max_nesting(segment.body),
        complexity=cyclomatic_complexity(segment.body, config.count_match_arms),
        is_empty=is_empty_body(segment),
        has_return_type=syntax.has_return_type(signature),
    )


FunctionCheck = Callable[[ScanContext, FunctionInfo], Optional[Issue]]


def check_long_function(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    limit, critical = ctx.config.function_line_limit, ctx.config.function_line_critical
    if fn.line_count > critical:
        severity, threshold = Severity.CRITICAL, critical
    elif fn.line_count > limit:
        severity, threshold = Severity.WARNING, limit
    else:
        return None
    return ctx.issue(
        fn.start_line,
        severity,
        CheckId.LONG_FUNCTION,
        f"Function '{fn.name}' has {fn.line_count} lines (max {threshold})",
    )


def check_high_complexity(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    warning, critical = ctx.config.cyclomatic_warning, ctx.config.cyclomatic_critical
    if fn.complexity > critical:
        severity, threshold = Severity.CRITICAL, critical
    elif fn.complexity > warning:
        severity, threshold = Severity.WARNING, warning
    else:
        return None
    return ctx.issue(
        fn.start_line,
        severity,
        CheckId.HIGH_COMPLEXITY,
        f"Function '{fn.name}' has cyclomatic complexity {fn.complexity} (max {threshold})",
    )


def check_too_many_params(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    limit = ctx.config.max_parameters
    if fn.param_count <= limit:
        return None
    return ctx.issue(
        fn.start_line,
        Severity.WARNING,
        CheckId.TOO_MANY_PARAMS,
        f"Function '{fn.name}' has {fn.param_count} parameters (max {limit})",
    )


def check_deep_nesting(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    limit = ctx.config.max_nesting
    if fn.max_nesting <= limit:
        return None
    return ctx.issue(
        fn.start_line,
        Severity.WARNING,
        CheckId.DEEP_NESTING,
        f"Function '{fn.name}' has nesting depth {fn.max_nesting} (max {limit})",
    )


def check_empty_function(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    if not fn.is_empty:
        return None
    return ctx.issue(
        fn.start_line, Severity.INFO, CheckId.EMPTY_FUNCTION, f"Function '{fn.name}' is empty"
    )


def check_missing_return_type(ctx: ScanContext, fn: FunctionInfo) -> Optional[Issue]:
    # Underscore functions are engine callbacks (_ready, _process, ...)
    if fn.has_return_type or fn.name.startswith(syntax.PRIVATE_PREFIX):
        return None
    return ctx.issue(
        fn.start_line,
        Severity.INFO,
        CheckId.MISSING_RETURN_TYPE,
        f"Function '{fn.name}' has no return type",
    )


FUNCTION_CHECKS: list[tuple[CheckId, FunctionCheck]] = [
    (CheckId.LONG_FUNCTION, check_long_function),
    (CheckId.HIGH_COMPLEXITY, check_high_complexity),
    (CheckId.TOO_MANY_PARAMS, check_too_many_params),
    (CheckId.DEEP_NESTING, check_deep_nesting),
    (CheckId.EMPTY_FUNCTION, check_empty_function),
    (CheckId.MISSING_RETURN_TYPE, check_missing_return_type),
]


class FunctionScanner:
    """Measures every function and runs the enabled per-function checks."""

    name = "functions"

    def __init__(self, checks: Optional[list[tuple[CheckId, FunctionCheck]]] = None):
        self.checks = checks if checks is not None else list(FUNCTION_CHECKS)

    def scan(self, ctx: ScanContext) -> FunctionScanResult:
        result = FunctionScanResult()
        active = [check for check_id, check in self.checks if ctx.enabled(check_id)]

        for segment in segment_functions(ctx.lines):
            fn = measure(segment, ctx.config)
            result.functions.append(fn)
            for check in active:
                issue = check(ctx, fn)
                if issue is not None:
                    result.issues.append(issue)

        return result
