"""Editor integration — diagnostics, hover text and quick fixes for issues."""

from __future__ import annotations

from dataclasses import dataclass

from baselinebuddy.fixes.engine import AutoFixEngine
from baselinebuddy.fixes.models import FixSuggestion
from baselinebuddy.registry.models import FeatureRecord
from baselinebuddy.report.formatters import format_status
from baselinebuddy.scanner.models import Issue, Severity

# LSP DiagnosticSeverity values
_LSP_SEVERITY = {
    Severity.ERROR: 1,
    Severity.WARNING: 2,
    Severity.INFO: 3,
}

_BROWSERS = (
    ("chrome", "Chrome"),
    ("chrome_android", "Chrome Android"),
    ("edge", "Edge"),
    ("firefox", "Firefox"),
    ("firefox_android", "Firefox Android"),
    ("safari", "Safari"),
    ("safari_ios", "Safari iOS"),
)


def to_diagnostic(issue: Issue) -> dict:
    """LSP-style diagnostic. Positions are 0-based; the range is empty."""
    position = {"line": issue.line - 1, "character": issue.column - 1}
    return {
        "range": {"start": dict(position), "end": dict(position)},
        "severity": _LSP_SEVERITY[issue.severity],
        "source": "baselinebuddy",
        "code": issue.feature_id,
        "message": issue.message,
    }


def hover_text(record: FeatureRecord) -> str:
    """Markdown hover for a feature: status, dates and browser versions."""
    lines = [f"**{record.name}**", "", record.description, ""]
    status = f"Baseline: {format_status(record.status)}"
    if record.baseline_low_date:
        status += f" (since {record.baseline_low_date})"
    lines.append(status)

    support = record.support.to_dict()
    if support:
        lines += ["", "| Browser | Version |", "|---|---|"]
        for key, label in _BROWSERS:
            if key in support:
                lines.append(f"| {label} | {support[key]} |")
    if record.spec_url:
        lines += ["", f"[Specification]({record.spec_url})"]
    return "\n".join(lines)


@dataclass(frozen=True)
class QuickFix:
    """A ready-to-apply edit for one issue."""

    title: str
    fix: FixSuggestion
    new_source: str


def quick_fix(
    source: str, issue: Issue, engine: AutoFixEngine | None = None
) -> QuickFix | None:
    """Best fix for the issue applied to source, or None if nothing changes."""
    engine = engine or AutoFixEngine()
    fix = engine.select_best_fix(engine.fixes_for(issue))
    if fix is None:
        return None
    new_source = engine.apply_fix(source, fix, issue.line)
    if new_source == source:
        return None
    return QuickFix(
        title=f"Replace '{fix.original_code}' with '{fix.fixed_code}'",
        fix=fix,
        new_source=new_source,
    )
