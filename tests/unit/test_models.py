"""Tests for issues, summaries and the canonical ScanResult shape."""

from __future__ import annotations

import json

from baselinebuddy.registry.models import BaselineStatus, FeatureGroup
from baselinebuddy.scanner.classifier import severity_for
from baselinebuddy.scanner.models import Issue, ScanResult, ScanSummary, Severity


def _issue(status: BaselineStatus, line: int = 1, file: str = "a.css") -> Issue:
    return Issue(
        type=FeatureGroup.CSS,
        feature_id="x",
        feature="X",
        status=status,
        severity=severity_for(status),
        message="X is something.",
        line=line,
        file=file,
    )


class TestIssue:
    def test_file_type(self):
        assert _issue(BaselineStatus.WIDELY, file="src/Site.CSS").file_type == "css"
        assert _issue(BaselineStatus.WIDELY, file="Makefile").file_type == ""

    def test_to_dict_uses_wire_names(self):
        data = _issue(BaselineStatus.LIMITED).to_dict()
        assert data["featureId"] == "x"
        assert data["status"] is False
        assert data["severity"] == "error"
        assert data["property"] is None
        assert data["autoFix"] is None
        assert data["column"] == 1

    def test_css_property_keeps_wire_key(self):
        issue = _issue(BaselineStatus.NEWLY, file="app/page.tsx")
        issue.css_property = "display"
        assert issue.file_type == "tsx"
        assert issue.to_dict()["property"] == "display"
        assert Issue.from_dict(issue.to_dict()).css_property == "display"


class TestSummary:
    def test_counts_from_one_reduction(self):
        issues = [
            _issue(BaselineStatus.LIMITED),
            _issue(BaselineStatus.NEWLY),
            _issue(BaselineStatus.NEWLY),
            _issue(BaselineStatus.WIDELY),
        ]
        summary = ScanSummary.from_issues(issues)
        assert summary.total == 4
        assert (summary.errors, summary.warnings, summary.info) == (1, 2, 1)
        assert summary.errors + summary.warnings + summary.info == summary.total
        assert summary.baseline_newly == 2
        assert summary.baseline_widely == 1
        assert summary.baseline_limited == 1

    def test_safe_and_widely_are_both_kept(self):
        summary = ScanSummary.from_issues(
            [_issue(BaselineStatus.WIDELY), _issue(BaselineStatus.NEWLY)]
        )
        data = summary.to_dict()
        assert data["baselineSafe"] == data["baselineWidely"] == 1

    def test_empty(self):
        assert ScanSummary.from_issues([]) == ScanSummary()


class TestScanResult:
    def test_build_invariants(self):
        issues = [_issue(BaselineStatus.NEWLY), _issue(BaselineStatus.WIDELY)]
        result = ScanResult.build(issues, scanned=3, with_issues=1)
        assert result.summary.total == len(result.issues)
        assert result.files.with_issues <= result.files.scanned

    def test_canonical_shape(self):
        result = ScanResult.build([_issue(BaselineStatus.NEWLY)], 1, 1)
        data = result.to_dict()
        assert set(data) == {"issues", "summary", "files"}
        assert set(data["summary"]) == {
            "total",
            "errors",
            "warnings",
            "info",
            "baselineSafe",
            "baselineNewly",
            "baselineWidely",
        }
        assert data["files"] == {"scanned": 1, "withIssues": 1}

    def test_stable_under_json_round_trip(self):
        issue = _issue(BaselineStatus.LIMITED, line=7)
        issue.css_property = "word-break"
        issue.value = "auto-phrase"
        issue.auto_fix = "word-break: break-word;"
        result = ScanResult.build([issue, _issue(BaselineStatus.WIDELY)], 2, 1)

        restored = ScanResult.from_dict(json.loads(json.dumps(result.to_dict())))
        assert restored == result
        assert restored.issues[0].status is BaselineStatus.LIMITED
        assert restored.issues[0].severity is Severity.ERROR
        assert restored.to_dict() == result.to_dict()
