"""Per-file analysis: run the scanners, then apply suppression."""

from __future__ import annotations

from typing import Iterable, Optional

from ..config import Config
from ..logging_config import get_logger
from ..models import FileResult, FunctionInfo, Issue
from ..scanning import ClassScanner, FunctionScanner, LineScanner, ScanContext
from ..suppression import IgnoreResolver, SuppressionIndex

logger = get_logger(__name__)

# Debt weights
DEBT_FILE_HARD = 50
DEBT_FILE_SOFT = 20
DEBT_FUNCTION_CRITICAL = 20
DEBT_FUNCTION_LONG = 10
DEBT_TOO_MANY_PARAMS = 5
DEBT_DEEP_NESTING = 5
DEBT_COMPLEXITY_CRITICAL = 25
DEBT_COMPLEXITY_WARNING = 10


def debt_score(line_count: int, functions: Iterable[FunctionInfo], config: Config) -> int:
    """Weighted sum of threshold violations.

    Computed from raw metrics, so neither suppression nor check toggles
    lower the score.
    """
    score = 0

    if line_count > config.file_line_hard:
        score += DEBT_FILE_HARD
    elif line_count > config.file_line_soft:
        score += DEBT_FILE_SOFT

    for fn in functions:
        if fn.line_count > config.function_line_critical:
            score += DEBT_FUNCTION_CRITICAL
        elif fn.line_count > config.function_line_limit:
            score += DEBT_FUNCTION_LONG
        if fn.param_count > config.max_parameters:
            score += DEBT_TOO_MANY_PARAMS
        if fn.max_nesting > config.max_nesting:
            score += DEBT_DEEP_NESTING
        if fn.complexity > config.cyclomatic_critical:
            score += DEBT_COMPLEXITY_CRITICAL
        elif fn.complexity > config.cyclomatic_warning:
            score += DEBT_COMPLEXITY_WARNING

    return score


class FileAnalyzer:
    """Runs resolver and scanners in sequence over one immutable context."""

    def __init__(
        self,
        resolver: Optional[IgnoreResolver] = None,
        line_scanner: Optional[LineScanner] = None,
        function_scanner: Optional[FunctionScanner] = None,
        class_scanner: Optional[ClassScanner] = None,
    ):
        self.resolver = resolver or IgnoreResolver()
        self.line_scanner = line_scanner or LineScanner()
        self.function_scanner = function_scanner or FunctionScanner()
        self.class_scanner = class_scanner or ClassScanner()

    def analyze(self, ctx: ScanContext) -> FileResult:
        index = self.resolver.build(ctx.lines)
        if index.unmatched_lines:
            logger.debug(
                f"{ctx.file_path}: unmatched ignore directives on lines {index.unmatched_lines}"
            )

        line_scan = self.line_scanner.scan(ctx)
        function_scan = self.function_scanner.scan(ctx)
        class_scan = self.class_scanner.scan(ctx, function_scan.functions, line_scan.signals)

        result = FileResult(
            file_path=ctx.file_path,
            line_count=ctx.line_count,
            functions=function_scan.functions,
            signals=line_scan.signals,
            dependencies=line_scan.dependencies,
            export_count=line_scan.export_count,
            unmatched_directives=list(index.unmatched_lines),
        )

        candidates = line_scan.issues + function_scan.issues + class_scan.issues
        result.issues, result.ignored_issues = split_suppressed(candidates, index)
        result.debt_score = debt_score(ctx.line_count, result.functions, ctx.config)
        return result


def split_suppressed(
    candidates: Iterable[Issue], index: SuppressionIndex
) -> tuple[list[Issue], list[Issue]]:
    """Partition candidate issues into (accepted, ignored)."""
    accepted: list[Issue] = []
    ignored: list[Issue] = []
    for issue in candidates:
        if index.should_ignore(issue.line, issue.check_id.value):
            ignored.append(issue)
        else:
            accepted.append(issue)
    return accepted, ignored


_DEFAULT_ANALYZER = FileAnalyzer()


def analyze(source_text: str, file_path: str, config: Optional[Config] = None) -> FileResult:
    """Analyze one file held in memory. Never touches storage.

    Args:
        source_text: Full file contents
        file_path: Path recorded on the result and every issue
        config: Run configuration (defaults when omitted)

    Returns:
        FileResult with accepted and ignored issues kept apart
    """
    ctx = ScanContext.from_source(source_text, file_path, config or Config.default())
    return _DEFAULT_ANALYZER.analyze(ctx)
