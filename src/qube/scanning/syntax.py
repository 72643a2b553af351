"""GDScript line-level syntax helpers shared by every scanner.

Nothing here tokenizes properly: each helper classifies a single line with
plain string tests or a small regex and falls back to "not matched" on
anything it does not recognise.
"""

from __future__ import annotations

import re
from typing import Optional

FUNC_KEYWORD = "func"
NOOP_KEYWORD = "pass"
COMMENT_MARKER = "#"
RETURN_ARROW = "->"
PRIVATE_PREFIX = "_"
TAB_WIDTH = 4
INDENT_WIDTH = 4

_FUNC_PREFIXES = ("func ", "static func ")

BRANCH_KEYWORDS = ("if", "elif", "for", "while", "match")
_BRANCH_RE = re.compile(r"^(?:%s)\b" % "|".join(BRANCH_KEYWORDS))
_INLINE_IF_RE = re.compile(r"\bif\b")
_AND_RE = re.compile(r"\band\b|&&")
_OR_RE = re.compile(r"\bor\b|\|\|")

SIGNAL_RE = re.compile(r"^signal\s+([A-Za-z_]\w*)")
LOAD_RE = re.compile(r"\b(?:preload|load)\(\s*[\"']([^\"']+)[\"']\s*\)")
EXPORT_RE = re.compile(r"^@export\w*")
VAR_RE = re.compile(r"^(?:@\w+(?:\([^)]*\))?\s+)*var\s+([A-Za-z_]\w*)\s*(.*)$")
CONST_RE = re.compile(r"^const\s+([A-Za-z_]\w*)")
CLASS_NAME_RE = re.compile(r"^class_name\s+([A-Za-z_]\w*)")
ENUM_RE = re.compile(r"^enum\s+([A-Za-z_]\w*)")

_STRING_RE = re.compile(r"\"(?:\\.|[^\"\\])*\"|'(?:\\.|[^'\\])*'")
_LINE_BREAK_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> list[str]:
    """Split on \\n or \\r\\n only; form feeds and other separators stay in the line."""
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_function_declaration(trimmed: str) -> bool:
    return trimmed.startswith(_FUNC_PREFIXES)


def is_comment(trimmed: str) -> bool:
    return trimmed.startswith(COMMENT_MARKER)


def code_portion(trimmed: str) -> str:
    """Return *trimmed* with string literals emptied and any trailing comment removed."""
    without_strings = _STRING_RE.sub(lambda m: m.group(0)[0] * 2, trimmed)
    hash_pos = without_strings.find(COMMENT_MARKER)
    if hash_pos >= 0:
        without_strings = without_strings[:hash_pos]
    return without_strings.rstrip()


def indent_columns(line: str) -> int:
    """Leading whitespace width, a tab counting as TAB_WIDTH columns."""
    columns = 0
    for ch in line:
        if ch == "\t":
            columns += TAB_WIDTH
        elif ch == " ":
            columns += 1
        else:
            break
    return columns


def indent_level(line: str) -> int:
    return indent_columns(line) // INDENT_WIDTH


def function_name(signature: str) -> str:
    """Text between the function keyword and the opening parenthesis."""
    text = signature.strip()
    for prefix in _FUNC_PREFIXES:
        if text.startswith(prefix):
            text = text[len(prefix):]
            break
    else:
        return ""
    paren = text.find("(")
    if paren >= 0:
        return text[:paren].strip()
    return text.split(":", 1)[0].strip()


def _parameter_span(signature: str) -> tuple[int, int]:
    """(open, close) indices of the parameter list; close is len() if unterminated."""
    open_pos = signature.find("(")
    if open_pos < 0:
        return -1, -1
    depth = 0
    for pos in range(open_pos, len(signature)):
        ch = signature[pos]
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
            if depth == 0:
                return open_pos, pos
    return open_pos, len(signature)


def parameter_text(signature: str) -> str:
    open_pos, close_pos = _parameter_span(signature)
    if open_pos < 0:
        return ""
    return signature[open_pos + 1:close_pos]


def count_parameters(signature: str) -> int:
    """Count top-level comma-separated entries in the parameter list."""
    text = code_portion(parameter_text(signature))
    if not text.strip():
        return 0
    depth = 0
    count = 1
    for ch in text:
        if ch in "([{":
            depth += 1
        elif ch in ")]}":
            depth -= 1
        elif ch == "," and depth == 0:
            count += 1
    # Trailing comma: func f(a, b,)
    if text.rstrip().endswith(","):
        count -= 1
    return count


def has_return_type(signature: str) -> bool:
    return RETURN_ARROW in signature


def inline_body(signature: str) -> Optional[str]:
    """Statement following the signature's colon on the same line, if any.

    ``func _ready(): pass`` yields ``"pass"``; a regular multi-line
    declaration yields None.
    """
    code = code_portion(signature.strip())
    _, close_pos = _parameter_span(code)
    if close_pos < 0:
        return None
    colon = code.find(":", close_pos)
    if colon < 0:
        return None
    body = code[colon + 1:].strip()
    return body or None


def branch_points(code: str) -> int:
    """Decision points contributed by one line of code (comments already stripped).

    A leading ``if``/``elif``/``for``/``while``/``match`` counts once, every
    ``and``/``&&`` and ``or``/``||`` counts once, and every further ``if``
    is an inline conditional expression.
    """
    points = 0
    leading = _BRANCH_RE.match(code)
    if leading:
        points += 1
    inline_ifs = len(_INLINE_IF_RE.findall(code))
    if leading and leading.group(0) == "if":
        inline_ifs -= 1
    points += inline_ifs
    points += len(_AND_RE.findall(code))
    points += len(_OR_RE.findall(code))
    return points


def starts_match(code: str) -> bool:
    return code.startswith("match ") or code.startswith("match(")
