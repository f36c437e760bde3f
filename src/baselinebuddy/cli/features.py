"""CLI commands: baselinebuddy features / explain — browse the feature registry."""

from __future__ import annotations

import json
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from baselinebuddy.fixes.engine import AutoFixEngine
from baselinebuddy.registry.models import BaselineStatus, FeatureGroup
from baselinebuddy.registry.registry import load_default_registry
from baselinebuddy.report.editor import hover_text
from baselinebuddy.report.formatters import format_status
from baselinebuddy.scanner.classifier import severity_for
from baselinebuddy.scanner.models import Issue

console = Console(stderr=True)

_STATUS_COLORS = {
    BaselineStatus.WIDELY: "green",
    BaselineStatus.NEWLY: "blue",
    BaselineStatus.LIMITED: "red",
}


@click.command()
@click.option(
    "--group",
    type=click.Choice([g.value for g in FeatureGroup]),
    default=None,
    help="Only features of this group.",
)
@click.option(
    "--status",
    type=click.Choice(["limited", "newly", "widely"]),
    default=None,
    help="Only features with this Baseline status.",
)
@click.option("--search", "-s", default=None, help="Substring of name/description.")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table.")
def features(
    group: str | None, status: str | None, search: str | None, as_json: bool
) -> None:
    """List known web features and their Baseline status."""
    registry = load_default_registry()
    records = registry.search(search) if search else list(registry)
    if group:
        records = [r for r in records if r.group is FeatureGroup(group)]
    if status:
        wanted = BaselineStatus.parse(status)
        records = [r for r in records if r.status is wanted]

    if as_json:
        click.echo(json.dumps([registry.feature_info(r.id) for r in records], indent=2))
        return

    table = Table(title="Web features", show_lines=False)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Group")
    table.add_column("Baseline")
    table.add_column("Since", justify="right")
    for record in records:
        color = _STATUS_COLORS[record.status]
        table.add_row(
            record.id,
            record.name,
            record.group.value,
            f"[{color}]{format_status(record.status)}[/{color}]",
            record.baseline_low_date or "-",
        )
    Console().print(table)


@click.command()
@click.argument("feature_id")
@click.option("--file-type", default=None, help="Show fixes for this extension.")
def explain(feature_id: str, file_type: str | None) -> None:
    """Explain a feature: support, guidance and available fixes."""
    registry = load_default_registry()
    record = registry.get(feature_id)
    if record is None:
        console.print(f"[red]Unknown feature: {escape(feature_id)}[/red]")
        sys.exit(1)

    out = Console()
    out.print(hover_text(record), markup=False)

    engine = AutoFixEngine()
    probe = Issue(
        type=record.group,
        feature_id=record.id,
        feature=record.name,
        status=record.status,
        severity=severity_for(record.status),
        message="",
        line=1,
    )
    suggestion = engine.generate_suggestion(probe)
    out.print("\n[bold]Guidance[/bold]")
    out.print(suggestion.explanation, markup=False)
    for alternative in suggestion.alternatives:
        out.print(f"  - {alternative}", markup=False)
    out.print(f"Learn more: {suggestion.learning_url}", markup=False)

    if file_type:
        fix = engine.select_best_fix(engine.fixes_for(probe, file_type))
        if fix is None:
            out.print(f"\nNo fixes for .{file_type.lstrip('.')} files.")
        else:
            out.print("\n[bold]Best fix[/bold]")
            out.print(engine.get_fix_explanation(fix), markup=False)
