"""Run-level aggregation and multi-file analysis."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Iterable, Optional

from ..config import Config
from ..logging_config import get_logger
from ..models import AnalysisResult, FileResult
from .analyzer import analyze

logger = get_logger(__name__)

# Below this many files the pool overhead is not worth it
_MIN_PARALLEL_FILES = 10


def aggregate(file_results: Iterable[FileResult], elapsed: float = 0.0) -> AnalysisResult:
    """Concatenate per-file results into one AnalysisResult, keeping order.

    Args:
        file_results: Results in the order they should be reported
        elapsed: Wall-clock duration of the run in seconds
    """
    result = AnalysisResult(elapsed_seconds=elapsed)
    for file_result in file_results:
        result.files.append(file_result)
        result.issues.extend(file_result.issues)
        result.ignored_issues.extend(file_result.ignored_issues)
        result.lines_analyzed += file_result.line_count
    result.files_analyzed = len(result.files)
    return result


def analyze_sources(
    sources: Iterable[tuple[str, str]],
    config: Optional[Config] = None,
    workers: Optional[int] = None,
) -> AnalysisResult:
    """Analyze ``(file_path, source_text)`` pairs and aggregate the results.

    Paths matching ``config.excluded_paths`` are skipped. With *workers*
    greater than one, files are analyzed in a thread pool; results are
    always sorted by path, so output does not depend on scheduling.

    Args:
        sources: Pairs supplied by the caller's file walker
        config: Run configuration (defaults when omitted)
        workers: Pool size; None or 1 runs sequentially
    """
    config = config or Config.default()
    started = time.perf_counter()

    pending = []
    for file_path, source_text in sources:
        if config.is_excluded(file_path):
            logger.debug(f"Skipping excluded path: {file_path}")
            continue
        pending.append((file_path, source_text))

    results: list[FileResult] = []
    if not workers or workers <= 1 or len(pending) < _MIN_PARALLEL_FILES:
        for file_path, source_text in pending:
            results.append(analyze(source_text, file_path, config))
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(analyze, source_text, file_path, config)
                for file_path, source_text in pending
            ]
            # A failing file raises here, as it would in the sequential loop
            for future in as_completed(futures):
                results.append(future.result())

    results.sort(key=lambda fr: fr.file_path)
    elapsed = time.perf_counter() - started
    logger.info(f"Analyzed {len(results)} files in {elapsed:.3f}s")
    return aggregate(results, elapsed)
