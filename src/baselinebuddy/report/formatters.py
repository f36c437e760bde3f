"""Report formatters — JSON, HTML and rich text renderings of a ScanResult."""

from __future__ import annotations

import html
import json
from collections.abc import Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from baselinebuddy.registry.models import BaselineStatus
from baselinebuddy.scanner.models import Issue, ScanResult, Severity

_SEVERITY_COLORS = {
    Severity.INFO: "blue",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}

_SEVERITY_ORDER = {
    Severity.ERROR: 0,
    Severity.WARNING: 1,
    Severity.INFO: 2,
}

_STATUS_LABELS = {
    BaselineStatus.WIDELY: ("Widely Available", "green"),
    BaselineStatus.NEWLY: ("Newly Available", "blue"),
    BaselineStatus.LIMITED: ("Limited Support", "red"),
}


def format_status(status: BaselineStatus) -> str:
    return _STATUS_LABELS[status][0]


def sort_by_severity(issues: Iterable[Issue]) -> list[Issue]:
    """Errors first, then file and line."""
    return sorted(
        issues, key=lambda i: (_SEVERITY_ORDER[i.severity], i.file, i.line)
    )


def group_by_file(issues: Iterable[Issue]) -> dict[str, list[Issue]]:
    grouped: dict[str, list[Issue]] = {}
    for issue in issues:
        grouped.setdefault(issue.file, []).append(issue)
    return grouped


def exit_code(result: ScanResult) -> int:
    """0 when clean, 1 when any error, 2 when only warnings."""
    if result.summary.errors:
        return 1
    if result.summary.warnings:
        return 2
    return 0


def format_json(result: ScanResult, indent: int | None = 2) -> str:
    return json.dumps(result.to_dict(), indent=indent)


def shorten_path(file_path: str, base_dir: str) -> str:
    """Shorten file path relative to scan directory."""
    if base_dir and file_path.startswith(base_dir):
        return file_path[len(base_dir) :].lstrip("/") or file_path
    return file_path


def render_text(
    result: ScanResult,
    console: Console,
    show_suggestions: bool = False,
) -> None:
    """Print the summary and an issue table to a rich console."""
    summary = result.summary
    console.print("\n[bold blue]Baseline Compliance Report[/bold blue]")
    console.print(
        f"Files scanned: {result.files.scanned}  "
        f"with issues: {result.files.with_issues}"
    )
    console.print(
        f"Issues: [red]{summary.errors} errors[/red], "
        f"[yellow]{summary.warnings} warnings[/yellow], "
        f"[blue]{summary.info} info[/blue]"
    )
    console.print(
        f"Baseline: [green]{summary.baseline_widely} widely[/green], "
        f"[blue]{summary.baseline_newly} newly[/blue], "
        f"[red]{summary.baseline_limited} limited[/red]"
    )

    if not result.issues:
        console.print("\n[green]No issues found.[/green]")
        return

    table = Table(title="Issues", show_lines=False)
    table.add_column("Severity", style="bold", width=8)
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Feature")
    table.add_column("Status")
    table.add_column("Message", max_width=60)

    for issue in sort_by_severity(result.issues):
        color = _SEVERITY_COLORS[issue.severity]
        label, status_color = _STATUS_LABELS[issue.status]
        table.add_row(
            f"[{color}]{issue.severity.value}[/{color}]",
            escape(shorten_path(issue.file, result.root)),
            str(issue.line),
            escape(issue.feature),
            f"[{status_color}]{label}[/{status_color}]",
            escape(issue.message),
        )
    console.print(table)

    if show_suggestions:
        console.print("\n[bold]Suggestions[/bold]")
        for n, issue in enumerate(sort_by_severity(result.issues), start=1):
            if issue.suggestion:
                console.print(f"[cyan]{n}. {escape(issue.feature)}[/cyan]")
                console.print(f"   [dim]{escape(issue.suggestion)}[/dim]")
            if issue.auto_fix:
                console.print(f"   [green]{escape(issue.auto_fix)}[/green]")


_HTML_STYLE = """
body { font-family: -apple-system, 'Segoe UI', Roboto, sans-serif; margin: 0;
       padding: 20px; background: #f5f5f5; }
.container { max-width: 1200px; margin: 0 auto; background: white;
             border-radius: 8px; }
.header { background: #4b4ba2; color: white; padding: 30px;
          border-radius: 8px 8px 0 0; }
.summary { display: flex; flex-wrap: wrap; gap: 20px; padding: 30px; }
.card { background: #f8f9fa; padding: 20px; border-radius: 8px;
        text-align: center; min-width: 150px; }
.card .number { font-size: 2em; font-weight: bold; }
.issues { padding: 0 30px 30px; }
.issue { background: #f8f9fa; margin: 10px 0; padding: 15px;
         border-radius: 8px; border-left: 4px solid #ddd; }
.issue.error { border-left-color: #dc3545; }
.issue.warning { border-left-color: #ffc107; }
.issue.info { border-left-color: #17a2b8; }
.details { color: #666; font-size: 0.9em; }
""".strip()


def _html_issue(issue: Issue, root: str) -> str:
    esc = html.escape
    location = f"{shorten_path(issue.file, root)}:{issue.line}"
    parts = [
        f'<div class="issue {issue.severity.value}">',
        f"<strong>{esc(issue.feature)}</strong> "
        f"<span>{esc(issue.severity.value.upper())}</span>",
        f'<div class="details">{esc(location)} · '
        f"{esc(format_status(issue.status))}</div>",
        f"<p>{esc(issue.message)}</p>",
    ]
    if issue.suggestion:
        parts.append(f'<p class="details">{esc(issue.suggestion)}</p>')
    if issue.auto_fix:
        parts.append(f"<pre>{esc(issue.auto_fix)}</pre>")
    parts.append("</div>")
    return "\n".join(parts)


def format_html(result: ScanResult, title: str = "Baseline Compliance Report") -> str:
    """Standalone HTML report. All issue text is escaped."""
    summary = result.summary
    cards = [
        ("Files scanned", result.files.scanned),
        ("Files with issues", result.files.with_issues),
        ("Errors", summary.errors),
        ("Warnings", summary.warnings),
        ("Info", summary.info),
        ("Widely available", summary.baseline_widely),
        ("Newly available", summary.baseline_newly),
        ("Limited support", summary.baseline_limited),
    ]
    card_html = "\n".join(
        f'<div class="card"><h3>{html.escape(label)}</h3>'
        f'<div class="number">{value}</div></div>'
        for label, value in cards
    )
    if result.issues:
        issues_html = "\n".join(
            _html_issue(i, result.root) for i in sort_by_severity(result.issues)
        )
    else:
        issues_html = "<p>No issues found.</p>"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<title>{html.escape(title)}</title>
<style>
{_HTML_STYLE}
</style>
</head>
<body>
<div class="container">
<div class="header"><h1>{html.escape(title)}</h1></div>
<div class="summary">
{card_html}
</div>
<div class="issues">
{issues_html}
</div>
</div>
</body>
</html>
"""
