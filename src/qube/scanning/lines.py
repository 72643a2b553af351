"""Line scanner: single-line checks plus the file-length check.

Each check is a pure function of (context, line) registered in
``LINE_CHECKS`` against the CheckId it produces. Checks run independently;
one line can yield issues from several of them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..models import CheckId, Issue, Severity
from . import syntax
from .context import ScanContext

PRINT_MESSAGE_WIDTH = 60

# Signed int or float, not glued to an identifier
_NUMBER_RE = re.compile(r"(?<![\w.])-?\d+(?:\.\d+)?(?![\w.])")
_QUOTES = ("\"", "'")

_SNAKE_CASE_RE = re.compile(r"^_*[a-z][a-z0-9_]*$")
_UPPER_SNAKE_RE = re.compile(r"^_*[A-Z][A-Z0-9_]*$")
_PASCAL_CASE_RE = re.compile(r"^[A-Z][A-Za-z0-9]*$")


@dataclass(frozen=True)
class Line:
    number: int
    raw: str
    trimmed: str


LineCheck = Callable[[ScanContext, Line], Optional[Issue]]


@dataclass
class LineScanResult:
    issues: list[Issue] = field(default_factory=list)
    signals: list[str] = field(default_factory=list)
    dependencies: list[str] = field(default_factory=list)
    export_count: int = 0


def check_long_line(ctx: ScanContext, line: Line) -> Optional[Issue]:
    limit = ctx.config.max_line_length
    length = len(line.raw)
    if length <= limit:
        return None
    return ctx.issue(
        line.number,
        Severity.INFO,
        CheckId.LONG_LINE,
        f"Line is {length} characters long (max {limit})",
    )


def check_todo_comment(ctx: ScanContext, line: Line) -> Optional[Issue]:
    for marker in ctx.config.todo_patterns:
        position = line.trimmed.find(marker)
        if position < 0:
            continue
        severity = Severity.INFO if marker == "TODO" else Severity.WARNING
        remainder = line.trimmed[position + len(marker):].lstrip(":").strip()
        message = f"{marker}: {remainder}" if remainder else marker
        return ctx.issue(line.number, severity, CheckId.TODO_COMMENT, message)
    return None


def check_print_statement(ctx: ScanContext, line: Line) -> Optional[Issue]:
    text = line.trimmed
    if syntax.is_comment(text):
        return None
    if not any(pattern in text for pattern in ctx.config.print_patterns):
        return None
    if any(allowed in text for allowed in ctx.config.print_whitelist):
        return None
    return ctx.issue(
        line.number,
        Severity.WARNING,
        CheckId.PRINT_STATEMENT,
        f"Debug print statement: {text[:PRINT_MESSAGE_WIDTH]}",
    )


def _skips_magic_numbers(text: str) -> bool:
    if syntax.is_comment(text) or text.startswith("const "):
        return True
    return "enum " in text or "enum{" in text or "@export" in text


def check_magic_number(ctx: ScanContext, line: Line) -> Optional[Issue]:
    text = line.trimmed
    if _skips_magic_numbers(text):
        return None
    allowed = ctx.config.allowed_numbers
    for match in _NUMBER_RE.finditer(text):
        start = match.start()
        if start > 0 and text[start - 1] in _QUOTES:
            continue
        literal = match.group(0)
        if float(literal) in allowed:
            continue
        return ctx.issue(
            line.number,
            Severity.INFO,
            CheckId.MAGIC_NUMBER,
            f"Magic number {literal} (consider a named constant)",
        )
    return None


def check_commented_code(ctx: ScanContext, line: Line) -> Optional[Issue]:
    text = line.trimmed
    for pattern in ctx.config.commented_code_patterns:
        if text.startswith(pattern) or f" {pattern}" in text or f"\t{pattern}" in text:
            return ctx.issue(
                line.number,
                Severity.INFO,
                CheckId.COMMENTED_CODE,
                f"Commented-out code: {text[:PRINT_MESSAGE_WIDTH]}",
            )
    return None


def check_missing_type_hint(ctx: ScanContext, line: Line) -> Optional[Issue]:
    match = syntax.VAR_RE.match(line.trimmed)
    if match is None:
        return None
    name, rest = match.group(1), match.group(2)
    # ": Type" annotations and ":=" inference both start with a colon
    if rest.startswith(":"):
        return None
    return ctx.issue(
        line.number,
        Severity.INFO,
        CheckId.MISSING_TYPE_HINT,
        f"Variable '{name}' has no type hint",
    )


def _naming_violation(text: str) -> Optional[str]:
    if syntax.is_function_declaration(text):
        name = syntax.function_name(text)
        if name and not _SNAKE_CASE_RE.match(name):
            return f"Function '{name}' should be snake_case"
        return None
    for regex, convention, kind in (
        (syntax.SIGNAL_RE, _SNAKE_CASE_RE, "Signal"),
        (syntax.CONST_RE, _UPPER_SNAKE_RE, "Constant"),
        (syntax.CLASS_NAME_RE, _PASCAL_CASE_RE, "Class name"),
        (syntax.ENUM_RE, _PASCAL_CASE_RE, "Enum"),
    ):
        match = regex.match(text)
        if match is None:
            continue
        name = match.group(1)
        if convention.match(name):
            return None
        # Preloaded scripts and scenes are named like classes
        if kind == "Constant" and syntax.LOAD_RE.search(text) and _PASCAL_CASE_RE.match(name):
            return None
        style = {"Constant": "UPPER_SNAKE_CASE", "Signal": "snake_case"}.get(kind, "PascalCase")
        return f"{kind} '{name}' should be {style}"
    return None


def check_naming_convention(ctx: ScanContext, line: Line) -> Optional[Issue]:
    message = _naming_violation(line.trimmed)
    if message is None:
        return None
    return ctx.issue(line.number, Severity.INFO, CheckId.NAMING_CONVENTION, message)


LINE_CHECKS: list[tuple[CheckId, LineCheck]] = [
    (CheckId.LONG_LINE, check_long_line),
    (CheckId.TODO_COMMENT, check_todo_comment),
    (CheckId.PRINT_STATEMENT, check_print_statement),
    (CheckId.MAGIC_NUMBER, check_magic_number),
    (CheckId.COMMENTED_CODE, check_commented_code),
    (CheckId.MISSING_TYPE_HINT, check_missing_type_hint),
    (CheckId.NAMING_CONVENTION, check_naming_convention),
]


def check_file_length(ctx: ScanContext) -> Optional[Issue]:
    """WARNING over the soft limit, CRITICAL over the hard one, at line 1."""
    count = ctx.line_count
    soft, hard = ctx.config.file_line_soft, ctx.config.file_line_hard
    if count > hard:
        return ctx.issue(
            1,
            Severity.CRITICAL,
            CheckId.FILE_LENGTH,
            f"File has {count} lines (critical threshold: {hard})",
        )
    if count > soft:
        return ctx.issue(
            1,
            Severity.WARNING,
            CheckId.FILE_LENGTH,
            f"File has {count} lines (threshold: {soft})",
        )
    return None


class LineScanner:
    """Runs every enabled line check over every physical line."""

    name = "lines"

    def __init__(self, checks: Optional[list[tuple[CheckId, LineCheck]]] = None):
        self.checks = checks if checks is not None else list(LINE_CHECKS)

    def scan(self, ctx: ScanContext) -> LineScanResult:
        result = LineScanResult()

        if ctx.enabled(CheckId.FILE_LENGTH):
            issue = check_file_length(ctx)
            if issue is not None:
                result.issues.append(issue)

        active = [check for check_id, check in self.checks if ctx.enabled(check_id)]

        for number, raw in enumerate(ctx.lines, start=1):
            line = Line(number=number, raw=raw, trimmed=raw.strip())
            for check in active:
                issue = check(ctx, line)
                if issue is not None:
                    result.issues.append(issue)
            self._record(line.trimmed, result)

        return result

    @staticmethod
    def _record(text: str, result: LineScanResult) -> None:
        """Signal, dependency and export bookkeeping for one line."""
        signal = syntax.SIGNAL_RE.match(text)
        if signal:
            result.signals.append(signal.group(1))
        if not syntax.is_comment(text):
            result.dependencies.extend(m.group(1) for m in syntax.LOAD_RE.finditer(text))
        if syntax.EXPORT_RE.match(text):
            result.export_count += 1
