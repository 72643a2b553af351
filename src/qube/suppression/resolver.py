"""Suppression index: which (line, check) pairs must be dropped.

The index is built once per file from that file's lines and is read-only
afterwards, so ``should_ignore`` has no side effects and may be called any
number of times in any order.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from ..scanning.syntax import is_function_declaration, split_lines
from .directives import Directive, DirectiveKind, find_directives

# ignore-file is only honoured in the file header
FILE_DIRECTIVE_WINDOW = 10


@dataclass(frozen=True)
class SuppressionRange:
    """Inclusive line range produced by ignore-function or an ignore-block pair."""

    start_line: int
    end_line: int
    check_ids: tuple[str, ...] = ()

    def covers(self, line: int, check_id: str) -> bool:
        if not self.start_line <= line <= self.end_line:
            return False
        return not self.check_ids or check_id in self.check_ids


@dataclass(frozen=True)
class BelowEntry:
    """ignore-below: suppressed from ``from_line`` to end of file."""

    from_line: int
    check_ids: tuple[str, ...] = ()

    def covers(self, line: int, check_id: str) -> bool:
        if line < self.from_line:
            return False
        return not self.check_ids or check_id in self.check_ids


def _covered(id_lists: Iterable[tuple[str, ...]], check_id: str) -> bool:
    return any(not ids or check_id in ids for ids in id_lists)


@dataclass
class SuppressionIndex:
    """Queryable suppression table for one file."""

    file_ids: list[tuple[str, ...]] = field(default_factory=list)
    below: list[BelowEntry] = field(default_factory=list)
    ranges: list[SuppressionRange] = field(default_factory=list)
    same_line: dict[int, list[tuple[str, ...]]] = field(default_factory=dict)
    next_line: dict[int, list[tuple[str, ...]]] = field(default_factory=dict)
    unmatched_lines: list[int] = field(default_factory=list)
    _range_starts: list[int] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        self.ranges.sort(key=lambda r: (r.start_line, r.end_line))
        self._range_starts = [r.start_line for r in self.ranges]

    def should_ignore(self, line: int, check_id: str) -> bool:
        """True if the issue for *check_id* on *line* is suppressed.

        Checked in order: file-wide, ignore-below, ranges, same-line
        ``ignore``, then ``ignore-next-line`` on the previous line.
        """
        check_id = str(check_id)

        if _covered(self.file_ids, check_id):
            return True

        if any(entry.covers(line, check_id) for entry in self.below):
            return True

        if self._in_range(line, check_id):
            return True

        if _covered(self.same_line.get(line, ()), check_id):
            return True

        if _covered(self.next_line.get(line - 1, ()), check_id):
            return True

        return False

    def _in_range(self, line: int, check_id: str) -> bool:
        # Only ranges starting at or before the line can contain it
        upper = bisect_right(self._range_starts, line)
        return any(r.covers(line, check_id) for r in self.ranges[:upper])

    @property
    def is_empty(self) -> bool:
        return not (self.file_ids or self.below or self.ranges or self.same_line or self.next_line)


class IgnoreResolver:
    """Builds a :class:`SuppressionIndex` from a file's lines."""

    def build_from_source(self, source_text: str) -> SuppressionIndex:
        return self.build(split_lines(source_text))

    def build(self, lines: Sequence[str]) -> SuppressionIndex:
        file_ids: list[tuple[str, ...]] = []
        below: list[BelowEntry] = []
        ranges: list[SuppressionRange] = []
        same_line: dict[int, list[tuple[str, ...]]] = {}
        next_line: dict[int, list[tuple[str, ...]]] = {}
        unmatched: list[int] = []
        block_stack: list[Directive] = []

        declarations = [
            number for number, text in enumerate(lines, start=1)
            if is_function_declaration(text.strip())
        ]

        for number, text in enumerate(lines, start=1):
            for directive in find_directives(text, number):
                kind = directive.kind
                if kind is DirectiveKind.FILE:
                    if number <= FILE_DIRECTIVE_WINDOW:
                        file_ids.append(directive.check_ids)
                elif kind is DirectiveKind.BELOW:
                    below.append(BelowEntry(number, directive.check_ids))
                elif kind is DirectiveKind.FUNCTION:
                    function_range = _function_range(directive, declarations, len(lines))
                    if function_range is None:
                        unmatched.append(number)
                    else:
                        ranges.append(function_range)
                elif kind is DirectiveKind.BLOCK_START:
                    block_stack.append(directive)
                elif kind is DirectiveKind.BLOCK_END:
                    if block_stack:
                        start = block_stack.pop()
                        ranges.append(SuppressionRange(start.line, number, start.check_ids))
                    else:
                        unmatched.append(number)
                elif kind is DirectiveKind.NEXT_LINE:
                    next_line.setdefault(number, []).append(directive.check_ids)
                else:
                    same_line.setdefault(number, []).append(directive.check_ids)

        # Unterminated block starts produce no range
        unmatched.extend(start.line for start in block_stack)

        return SuppressionIndex(
            file_ids=file_ids,
            below=below,
            ranges=ranges,
            same_line=same_line,
            next_line=next_line,
            unmatched_lines=sorted(unmatched),
        )


def _function_range(
    directive: Directive, declarations: list[int], total_lines: int
) -> SuppressionRange | None:
    """Range of the first function declared strictly after the directive."""
    position = bisect_right(declarations, directive.line)
    if position >= len(declarations):
        return None
    start = declarations[position]
    if position + 1 < len(declarations):
        end = declarations[position + 1] - 1
    else:
        end = total_lines
    return SuppressionRange(start, end, directive.check_ids)


def build_index(lines: Sequence[str]) -> SuppressionIndex:
    return IgnoreResolver().build(lines)
