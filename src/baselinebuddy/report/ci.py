"""CI integration — pass/fail checks, summaries, PR comments and job outputs."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path

from baselinebuddy.errors import ConfigError, PathError
from baselinebuddy.report.formatters import (
    format_status,
    shorten_path,
    sort_by_severity,
)
from baselinebuddy.scanner.engine import ScanEngine, default_engine
from baselinebuddy.scanner.models import Issue, ScanResult
from baselinebuddy.scanner.options import (
    DEFAULT_EXCLUDE_PATTERNS,
    DEFAULT_INCLUDE_PATTERNS,
    ScanOptions,
    ScanProfile,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}

_SEVERITY_MARKS = {"error": "❌", "warning": "⚠️", "info": "ℹ️"}


@dataclass(frozen=True)
class CheckOutcome:
    """Result of a CI check: the scan plus the pass/fail verdict."""

    success: bool
    result: ScanResult
    summary: str


def _env_list(environ: Mapping[str, str], name: str) -> tuple[str, ...]:
    raw = environ.get(name, "")
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _env_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUE_VALUES


def profile_from_env(environ: Mapping[str, str] | None = None) -> ScanProfile:
    """Build a CI profile from BASELINE_* variables (GitLab-style pipelines).

    List variables are comma-separated. Unset variables keep the defaults.
    """
    environ = os.environ if environ is None else environ
    workers = environ.get("BASELINE_WORKERS", "1")
    try:
        worker_count = int(workers)
    except ValueError:
        raise ConfigError(
            f"BASELINE_WORKERS must be an integer, got {workers!r}"
        ) from None

    options = ScanOptions(
        include_patterns=_env_list(environ, "BASELINE_INCLUDE_PATTERNS")
        or DEFAULT_INCLUDE_PATTERNS,
        exclude_patterns=_env_list(environ, "BASELINE_EXCLUDE_PATTERNS")
        or DEFAULT_EXCLUDE_PATTERNS,
        baseline_level=environ.get("BASELINE_LEVEL") or "widely",
        enable_ai=_env_bool(environ, "BASELINE_ENABLE_AI", False),
        output_format=environ.get("BASELINE_OUTPUT_FORMAT") or "text",
        workers=worker_count,
    )
    return ScanProfile(
        name="ci",
        options=options,
        fail_on_error=_env_bool(environ, "BASELINE_FAIL_ON_ERROR", True),
        fail_on_warning=_env_bool(environ, "BASELINE_FAIL_ON_WARNING", False),
    )


def should_fail(result: ScanResult, profile: ScanProfile) -> bool:
    if profile.fail_on_error and result.summary.errors > 0:
        return True
    if profile.fail_on_warning and result.summary.warnings > 0:
        return True
    return False


def summary_text(result: ScanResult, profile: ScanProfile) -> str:
    """Plain-text summary for CI logs and step summaries."""
    summary = result.summary
    lines = [
        "Baseline Compliance Check Results",
        "=================================",
        "",
        f"Files scanned: {result.files.scanned}",
        f"Files with issues: {result.files.with_issues}",
        "",
        f"Issues found: {summary.total}",
        f"  Errors: {summary.errors}",
        f"  Warnings: {summary.warnings}",
        f"  Info: {summary.info}",
        "",
        "Baseline status:",
        f"  Widely available: {summary.baseline_widely}",
        f"  Newly available: {summary.baseline_newly}",
        f"  Limited support: {summary.baseline_limited}",
        "",
    ]
    if profile.fail_on_error and summary.errors > 0:
        lines.append(f"Check failed due to {summary.errors} error(s)")
    elif profile.fail_on_warning and summary.warnings > 0:
        lines.append(f"Check failed due to {summary.warnings} warning(s)")
    else:
        lines.append("Check passed")
    return "\n".join(lines) + "\n"


def _comment_row(issue: Issue, root: str) -> str:
    mark = _SEVERITY_MARKS[issue.severity.value]
    location = f"{shorten_path(issue.file, root)}:{issue.line}"
    message = issue.message.replace("|", "\\|")
    return (
        f"| {mark} {issue.severity.value} | `{location}` | {issue.feature} "
        f"| {format_status(issue.status)} | {message} |"
    )


def pr_comment(result: ScanResult, profile: ScanProfile, max_issues: int = 20) -> str:
    """Markdown comment for pull/merge requests."""
    summary = result.summary
    passed = not should_fail(result, profile)
    lines = [
        "## Baseline Compatibility Report",
        "",
        "✅ **Check passed**" if passed else "❌ **Check failed**",
        "",
        "| | Count |",
        "|---|---|",
        f"| Files scanned | {result.files.scanned} |",
        f"| Files with issues | {result.files.with_issues} |",
        f"| Errors | {summary.errors} |",
        f"| Warnings | {summary.warnings} |",
        f"| Info | {summary.info} |",
        f"| Widely available | {summary.baseline_widely} |",
        f"| Newly available | {summary.baseline_newly} |",
        f"| Limited support | {summary.baseline_limited} |",
    ]
    if result.issues:
        issues = sort_by_severity(result.issues)
        lines += [
            "",
            "### Issues",
            "",
            "| Severity | Location | Feature | Status | Message |",
            "|---|---|---|---|---|",
        ]
        lines += [_comment_row(i, result.root) for i in issues[:max_issues]]
        if len(issues) > max_issues:
            lines += ["", f"_...and {len(issues) - max_issues} more._"]
    return "\n".join(lines) + "\n"


def github_outputs(result: ScanResult, success: bool) -> dict[str, str]:
    summary = result.summary
    return {
        "total": str(summary.total),
        "errors": str(summary.errors),
        "warnings": str(summary.warnings),
        "info": str(summary.info),
        "baseline_widely": str(summary.baseline_widely),
        "baseline_newly": str(summary.baseline_newly),
        "baseline_limited": str(summary.baseline_limited),
        "success": "true" if success else "false",
    }


def write_github_output(
    outcome: CheckOutcome, environ: Mapping[str, str] | None = None
) -> None:
    """Append job outputs and the step summary when running on GitHub Actions."""
    environ = os.environ if environ is None else environ

    output_path = environ.get("GITHUB_OUTPUT")
    if output_path:
        pairs = github_outputs(outcome.result, outcome.success)
        with open(output_path, "a", encoding="utf-8") as fh:
            for key, value in pairs.items():
                fh.write(f"{key}={value}\n")

    summary_path = environ.get("GITHUB_STEP_SUMMARY")
    if summary_path:
        with open(summary_path, "a", encoding="utf-8") as fh:
            fh.write(outcome.summary)


def gitlab_exports(outcome: CheckOutcome) -> list[str]:
    """Shell export lines for GitLab dotenv-style job variables."""
    summary = outcome.result.summary
    return [
        f"export BASELINE_TOTAL_ISSUES={summary.total}",
        f"export BASELINE_ERRORS={summary.errors}",
        f"export BASELINE_WARNINGS={summary.warnings}",
        f"export BASELINE_INFO={summary.info}",
        f"export BASELINE_SUCCESS={'true' if outcome.success else 'false'}",
    ]


class BaselineChecker:
    """Runs scans for CI and decides pass or fail from a profile."""

    def __init__(self, engine: ScanEngine | None = None) -> None:
        self._engine = engine or default_engine()

    def check_directory(
        self,
        directory: str | Path,
        profile: ScanProfile | None = None,
        cancel: threading.Event | None = None,
    ) -> CheckOutcome:
        profile = profile or ScanProfile()
        result = self._engine.scan_directory(directory, profile.options, cancel)
        return self._outcome(result, profile)

    def check_files(
        self, paths: Iterable[str | Path], profile: ScanProfile | None = None
    ) -> CheckOutcome:
        """Check an explicit file list, e.g. the files changed in a PR.

        Missing or unreadable files are logged and skipped.
        """
        profile = profile or ScanProfile()
        issues: list[Issue] = []
        scanned = 0
        with_issues = 0
        for path in paths:
            try:
                single = self._engine.scan_file(path, profile.options)
            except PathError as e:
                logger.warning("Skipping %s: %s", path, e)
                continue
            scanned += single.files.scanned
            with_issues += single.files.with_issues
            issues.extend(single.issues)

        result = ScanResult.build(issues, scanned=scanned, with_issues=with_issues)
        return self._outcome(result, profile)

    @staticmethod
    def _outcome(result: ScanResult, profile: ScanProfile) -> CheckOutcome:
        return CheckOutcome(
            success=not should_fail(result, profile),
            result=result,
            summary=summary_text(result, profile),
        )
