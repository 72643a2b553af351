"""Ignore-directive parsing.

Directives are plain substrings that may appear anywhere on a line,
usually inside a comment::

    var speed = 42  # qube:ignore:magic-number
    # qube:ignore-next-line:print-statement,todo-comment
    # qube:ignore-block-start
    # qube:ignore-block-end

An id list follows a ``:`` and runs up to the next whitespace. Without one
the directive is a wildcard covering every check.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

DIRECTIVE_PREFIX = "qube:"


class DirectiveKind(str, Enum):
    FILE = "ignore-file"
    BELOW = "ignore-below"
    FUNCTION = "ignore-function"
    BLOCK_START = "ignore-block-start"
    BLOCK_END = "ignore-block-end"
    NEXT_LINE = "ignore-next-line"
    LINE = "ignore"


# Longer keywords first so "ignore" never shadows "ignore-next-line"
_KEYWORDS = sorted((kind.value for kind in DirectiveKind), key=len, reverse=True)
_DIRECTIVE_RE = re.compile(
    re.escape(DIRECTIVE_PREFIX)
    + r"(%s)(?![\w-])(?::(\S*))?" % "|".join(re.escape(k) for k in _KEYWORDS)
)


@dataclass(frozen=True)
class Directive:
    """One directive occurrence. Empty ``check_ids`` means all checks."""

    kind: DirectiveKind
    line: int
    check_ids: tuple[str, ...] = ()

    @property
    def is_wildcard(self) -> bool:
        return not self.check_ids

    def covers(self, check_id: str) -> bool:
        return self.is_wildcard or check_id in self.check_ids


def parse_ids(raw: str | None) -> tuple[str, ...]:
    """Split a comma list, trimming each id and dropping empty entries."""
    if not raw:
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def find_directives(text: str, line: int) -> list[Directive]:
    """All directives on one line, in order of appearance."""
    if DIRECTIVE_PREFIX not in text:
        return []
    return [
        Directive(kind=DirectiveKind(m.group(1)), line=line, check_ids=parse_ids(m.group(2)))
        for m in _DIRECTIVE_RE.finditer(text)
    ]
