"""Tests for CI checks, env-driven profiles and job outputs."""

from __future__ import annotations

from pathlib import Path

import pytest

from baselinebuddy.errors import ConfigError
from baselinebuddy.registry.models import BaselineStatus
from baselinebuddy.report.ci import (
    BaselineChecker,
    gitlab_exports,
    pr_comment,
    profile_from_env,
    should_fail,
    summary_text,
    write_github_output,
)
from baselinebuddy.scanner.options import DEFAULT_EXCLUDE_PATTERNS, ScanProfile


@pytest.fixture
def checker(engine) -> BaselineChecker:
    return BaselineChecker(engine)


class TestProfileFromEnv:
    def test_defaults(self):
        profile = profile_from_env({})
        assert profile.name == "ci"
        assert profile.options.baseline_level is BaselineStatus.WIDELY
        assert profile.options.exclude_patterns == DEFAULT_EXCLUDE_PATTERNS
        assert profile.fail_on_error
        assert not profile.fail_on_warning

    def test_variables(self):
        profile = profile_from_env(
            {
                "BASELINE_INCLUDE_PATTERNS": "**/*.css, src/*.js",
                "BASELINE_EXCLUDE_PATTERNS": "**/vendor/**",
                "BASELINE_LEVEL": "newly",
                "BASELINE_ENABLE_AI": "true",
                "BASELINE_WORKERS": "3",
                "BASELINE_FAIL_ON_ERROR": "false",
                "BASELINE_FAIL_ON_WARNING": "yes",
            }
        )
        assert profile.options.include_patterns == ("**/*.css", "src/*.js")
        assert profile.options.exclude_patterns == ("**/vendor/**",)
        assert profile.options.baseline_level is BaselineStatus.NEWLY
        assert profile.options.enable_ai
        assert profile.options.workers == 3
        assert not profile.fail_on_error
        assert profile.fail_on_warning

    def test_bad_workers(self):
        with pytest.raises(ConfigError):
            profile_from_env({"BASELINE_WORKERS": "many"})

    def test_bad_level(self):
        with pytest.raises(ConfigError):
            profile_from_env({"BASELINE_LEVEL": "sometimes"})


class TestChecker:
    def test_fails_on_error_by_default(self, project_tree: Path, checker):
        outcome = checker.check_directory(project_tree)
        assert not outcome.success
        assert outcome.result.summary.errors == 1
        assert outcome.summary.endswith("Check failed due to 1 error(s)\n")

    def test_passes_when_errors_allowed(self, project_tree: Path, checker):
        profile = ScanProfile(fail_on_error=False)
        outcome = checker.check_directory(project_tree, profile)
        assert outcome.success
        assert outcome.summary.endswith("Check passed\n")

    def test_fail_on_warning(self, project_tree: Path, checker):
        (project_tree / "src" / "cards.css").unlink()
        profile = ScanProfile(fail_on_warning=True)
        outcome = checker.check_directory(project_tree, profile)
        assert not outcome.success
        assert "Check failed due to 2 warning(s)" in outcome.summary

    def test_check_files_skips_missing(self, project_tree: Path, checker, caplog):
        outcome = checker.check_files(
            [project_tree / "src" / "layout.css", project_tree / "gone.css"]
        )
        assert outcome.success
        assert outcome.result.files.scanned == 1
        assert outcome.result.summary.total == 1
        assert "gone.css" in caplog.text

    def test_should_fail(self, project_tree: Path, checker):
        result = checker.check_directory(project_tree).result
        assert should_fail(result, ScanProfile())
        assert not should_fail(result, ScanProfile(fail_on_error=False))
        strict = ScanProfile(fail_on_error=False, fail_on_warning=True)
        assert should_fail(result, strict)


class TestReports:
    def test_summary_text_counts(self, project_tree: Path, checker):
        outcome = checker.check_directory(project_tree)
        text = summary_text(outcome.result, ScanProfile())
        assert "Files scanned: 5" in text
        assert "Issues found: 7" in text
        assert "Limited support: 1" in text

    def test_pr_comment(self, project_tree: Path, checker):
        result = checker.check_directory(project_tree).result
        comment = pr_comment(result, ScanProfile())
        assert comment.startswith("## Baseline Compatibility Report")
        assert "❌ **Check failed**" in comment
        assert "`src/cards.css:2`" in comment
        rows = [line for line in comment.splitlines() if line.startswith("| ❌")]
        assert len(rows) == 1

    def test_pr_comment_truncates(self, project_tree: Path, checker):
        result = checker.check_directory(project_tree).result
        comment = pr_comment(result, ScanProfile(), max_issues=3)
        assert "_...and 4 more._" in comment

    def test_github_output_files(self, project_tree: Path, checker, tmp_path: Path):
        outcome = checker.check_directory(project_tree)
        output = tmp_path / "out.txt"
        step_summary = tmp_path / "summary.md"
        write_github_output(
            outcome,
            {"GITHUB_OUTPUT": str(output), "GITHUB_STEP_SUMMARY": str(step_summary)},
        )
        lines = output.read_text().splitlines()
        assert "errors=1" in lines
        assert "success=false" in lines
        assert step_summary.read_text() == outcome.summary

    def test_github_output_outside_actions(self, project_tree: Path, checker):
        # nothing to write to; must not raise
        write_github_output(checker.check_directory(project_tree), {})

    def test_gitlab_exports(self, project_tree: Path, checker):
        outcome = checker.check_directory(project_tree)
        exports = gitlab_exports(outcome)
        assert "export BASELINE_TOTAL_ISSUES=7" in exports
        assert "export BASELINE_SUCCESS=false" in exports
