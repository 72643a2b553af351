"""Tests for suppression index construction and lookup."""

import pytest

from qube.suppression import IgnoreResolver, SuppressionRange, build_index


def _lines(*lines):
    return list(lines)


class TestFileDirective:
    """ignore-file only applies from the file header."""

    def test_wildcard_on_first_line(self):
        index = build_index(_lines("# qube:ignore-file", "extends Node", "var x = 5"))
        for check in ("magic-number", "long-line", "god-class"):
            assert index.should_ignore(3, check)
            assert index.should_ignore(1, check)

    def test_tenth_line_is_inside_window(self):
        lines = ["extends Node"] * 9 + ["# qube:ignore-file:magic-number"] + ["var x = 5"]
        index = build_index(lines)
        assert index.should_ignore(11, "magic-number")
        assert not index.should_ignore(11, "long-line")

    def test_line_fifteen_has_no_effect(self):
        lines = ["extends Node"] * 14 + ["# qube:ignore-file"] + ["var x = 5"]
        index = build_index(lines)
        assert not index.should_ignore(16, "magic-number")
        assert not index.should_ignore(15, "magic-number")


class TestBelowDirective:
    """ignore-below runs to the end of the file."""

    def test_from_directive_line_onward(self):
        index = build_index(_lines("var a = 5", "# qube:ignore-below:magic-number", "var b = 6", "var c = 7"))
        assert not index.should_ignore(1, "magic-number")
        assert index.should_ignore(2, "magic-number")
        assert index.should_ignore(4, "magic-number")
        assert not index.should_ignore(4, "long-line")

    def test_any_matching_entry_suffices(self):
        index = build_index(
            _lines("# qube:ignore-below:long-line", "x", "# qube:ignore-below:todo-comment", "y")
        )
        assert index.should_ignore(4, "long-line")
        assert index.should_ignore(4, "todo-comment")
        assert not index.should_ignore(2, "todo-comment")


class TestFunctionDirective:
    """ignore-function covers the following function."""

    SOURCE = _lines(
        "extends Node",                        # 1
        "# qube:ignore-function:magic-number", # 2
        "func first():",                       # 3
        "\tvar x = 42",                        # 4
        "",                                    # 5
        "func second():",                      # 6
        "\tvar y = 42",                        # 7
    )

    def test_range_ends_before_next_function(self):
        index = build_index(self.SOURCE)
        assert index.ranges == [SuppressionRange(3, 5, ("magic-number",))]
        assert index.should_ignore(4, "magic-number")
        assert not index.should_ignore(7, "magic-number")
        assert not index.should_ignore(4, "long-line")

    def test_last_function_runs_to_end(self):
        lines = ["# qube:ignore-function", "func only():", "\tpass", "\tvar z = 9"]
        index = build_index(lines)
        assert index.ranges == [SuppressionRange(2, 4, ())]

    def test_no_following_function(self):
        lines = ["func only():", "\tpass", "# qube:ignore-function"]
        index = build_index(lines)
        assert index.ranges == []
        assert index.unmatched_lines == [3]

    def test_directive_on_declaration_line_targets_next_function(self):
        lines = ["func a():  # qube:ignore-function", "\tpass", "func b():", "\tpass"]
        index = build_index(lines)
        assert index.ranges == [SuppressionRange(3, 4, ())]


class TestBlockDirectives:
    """Stack-based ignore-block-start / ignore-block-end."""

    def test_simple_block(self):
        index = build_index(
            _lines("# qube:ignore-block-start", "var a = 5", "# qube:ignore-block-end", "var b = 5")
        )
        assert index.ranges == [SuppressionRange(1, 3, ())]
        assert index.should_ignore(2, "magic-number")
        assert not index.should_ignore(4, "magic-number")

    def test_nested_blocks(self):
        lines = _lines(
            "# qube:ignore-block-start:magic-number",  # 1
            "var a = 5",                               # 2 outer only
            "# qube:ignore-block-start",               # 3
            "var b = 5",                               # 4 both
            "# qube:ignore-block-end",                 # 5
            "var c = 5",                               # 6 outer only
            "# qube:ignore-block-end",                 # 7
            "var d = 5",                               # 8 neither
        )
        index = build_index(lines)
        assert sorted(index.ranges, key=lambda r: r.start_line) == [
            SuppressionRange(1, 7, ("magic-number",)),
            SuppressionRange(3, 5, ()),
        ]
        assert index.should_ignore(2, "magic-number")
        assert not index.should_ignore(2, "missing-type-hint")
        assert index.should_ignore(4, "missing-type-hint")
        assert index.should_ignore(6, "magic-number")
        assert not index.should_ignore(8, "magic-number")

    def test_unmatched_end_is_noop(self):
        index = build_index(_lines("# qube:ignore-block-end", "var a = 5"))
        assert index.ranges == []
        assert index.unmatched_lines == [1]
        assert not index.should_ignore(2, "magic-number")

    def test_unterminated_start_produces_no_range(self):
        index = build_index(_lines("var a = 5", "# qube:ignore-block-start", "var b = 5"))
        assert index.ranges == []
        assert index.unmatched_lines == [2]
        assert not index.should_ignore(3, "magic-number")


class TestLineDirectives:
    """Same-line and next-line directives."""

    def test_same_line_scoped(self):
        index = build_index(_lines("var debug_print = true  # qube:ignore:magic-number"))
        assert index.should_ignore(1, "magic-number")
        assert not index.should_ignore(1, "todo-comment")
        assert not index.should_ignore(2, "magic-number")

    def test_next_line(self):
        index = build_index(_lines("# qube:ignore-next-line", 'print("x")', 'print("y")'))
        assert index.should_ignore(2, "print-statement")
        assert not index.should_ignore(3, "print-statement")
        assert not index.should_ignore(1, "print-statement")

    def test_next_line_with_list(self):
        index = build_index(_lines("# qube:ignore-next-line:print-statement,magic-number", "x"))
        assert index.should_ignore(2, "magic-number")
        assert not index.should_ignore(2, "long-line")

    def test_whitespace_ends_id_list(self):
        index = build_index(_lines("# qube:ignore-next-line:print-statement, magic-number", "x"))
        assert index.should_ignore(2, "print-statement")
        assert not index.should_ignore(2, "magic-number")


class TestIndexProperties:
    """Lookup behaviour independent of directive kind."""

    def test_idempotent(self):
        index = build_index(_lines("# qube:ignore-block-start:long-line", "x", "# qube:ignore-block-end"))
        first = [index.should_ignore(line, "long-line") for line in range(1, 4)]
        second = [index.should_ignore(line, "long-line") for line in range(1, 4)]
        assert first == second == [True, True, True]

    def test_empty_index(self):
        index = build_index(_lines("extends Node", "var a := 1"))
        assert index.is_empty
        assert not index.should_ignore(1, "magic-number")

    def test_resolver_instances_share_nothing(self):
        resolver = IgnoreResolver()
        first = resolver.build(["# qube:ignore-file"])
        second = resolver.build(["extends Node"])
        assert first.should_ignore(1, "long-line")
        assert not second.should_ignore(1, "long-line")

    @pytest.mark.parametrize("line", [0, -1, 10_000])
    def test_out_of_range_lines(self, line):
        index = build_index(_lines("# qube:ignore-block-start", "x", "# qube:ignore-block-end"))
        assert not index.should_ignore(line, "magic-number")

    def test_form_feed_does_not_shift_next_line_target(self):
        source = '# qube:ignore-next-line:magic-number "a\x0cb"\nvar x: int = 42\nvar y: int = 43\n'
        index = IgnoreResolver().build_from_source(source)
        assert index.should_ignore(2, "magic-number")
        assert not index.should_ignore(3, "magic-number")
