"""Ignore-directive parsing and suppression resolution."""

from .directives import DIRECTIVE_PREFIX, Directive, DirectiveKind, find_directives
from .resolver import (
    FILE_DIRECTIVE_WINDOW,
    BelowEntry,
    IgnoreResolver,
    SuppressionIndex,
    SuppressionRange,
    build_index,
)

__all__ = [
    "DIRECTIVE_PREFIX",
    "Directive",
    "DirectiveKind",
    "find_directives",
    "FILE_DIRECTIVE_WINDOW",
    "BelowEntry",
    "IgnoreResolver",
    "SuppressionIndex",
    "SuppressionRange",
    "build_index",
]
