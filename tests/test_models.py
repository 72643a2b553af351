"""Tests for result models and their serialised form."""

import pytest

from qube.models import AnalysisResult, CheckId, FileResult, FunctionInfo, Issue, Severity


class TestSeverity:
    """Ordering and labels."""

    def test_ordering(self):
        assert Severity.INFO < Severity.WARNING < Severity.CRITICAL

    def test_label(self):
        assert Severity.CRITICAL.label == "critical"
        assert str(Severity.INFO) == "info"


class TestCheckId:
    """Stable identifiers."""

    def test_closed_set(self):
        assert len(CheckId) == 15

    def test_lookup_by_value(self):
        assert CheckId("magic-number") is CheckId.MAGIC_NUMBER
        with pytest.raises(ValueError):
            CheckId("no-such-check")

    def test_toggle_name(self):
        assert CheckId.TOO_MANY_PARAMS.toggle == "check_too_many_params"

    def test_compares_as_string(self):
        assert CheckId.GOD_CLASS == "god-class"
        assert str(CheckId.GOD_CLASS) == "god-class"


class TestIssue:
    """Immutable issue records."""

    def test_frozen(self):
        issue = Issue("res://a.gd", 3, Severity.INFO, CheckId.LONG_LINE, "too long")
        with pytest.raises(AttributeError):
            issue.line = 4

    def test_to_dict(self):
        issue = Issue("res://a.gd", 3, Severity.WARNING, CheckId.PRINT_STATEMENT, "print")
        assert issue.to_dict() == {
            "file": "res://a.gd",
            "line": 3,
            "severity": "warning",
            "check_id": "print-statement",
            "message": "print",
        }


class TestFileResult:
    """Per-file helpers."""

    def test_public_function_count(self):
        fr = FileResult(
            file_path="res://a.gd",
            line_count=10,
            functions=[FunctionInfo(name="_ready"), FunctionInfo(name="jump"), FunctionInfo(name="run")],
        )
        assert fr.public_function_count == 2

    def test_issues_for(self):
        issues = [
            Issue("res://a.gd", 1, Severity.INFO, CheckId.LONG_LINE, "a"),
            Issue("res://a.gd", 2, Severity.INFO, CheckId.MAGIC_NUMBER, "b"),
        ]
        fr = FileResult(file_path="res://a.gd", line_count=2, issues=issues)
        assert fr.issues_for(CheckId.MAGIC_NUMBER) == [issues[1]]

    def test_to_dict_keys(self):
        data = FileResult(file_path="res://a.gd", line_count=0).to_dict()
        assert data["file"] == "res://a.gd"
        assert data["issues"] == []
        assert data["unmatched_directives"] == []


class TestAnalysisResult:
    """Counts and summaries."""

    def test_counts_and_breakdown(self):
        issues = [
            Issue("a", 1, Severity.CRITICAL, CheckId.FILE_LENGTH, ""),
            Issue("a", 2, Severity.WARNING, CheckId.PRINT_STATEMENT, ""),
            Issue("a", 3, Severity.WARNING, CheckId.PRINT_STATEMENT, ""),
            Issue("a", 4, Severity.INFO, CheckId.MAGIC_NUMBER, ""),
        ]
        result = AnalysisResult(issues=issues)
        assert (result.critical_count, result.warning_count, result.info_count) == (1, 2, 1)
        assert result.issues_by_check() == {
            "file-length": 1,
            "magic-number": 1,
            "print-statement": 2,
        }
        assert result.to_dict()["exit_code"] == 2
