"""CLI command: baselinebuddy fix <file> — propose or apply auto-fixes."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from baselinebuddy.errors import ReadError
from baselinebuddy.fixes.engine import DEFAULT_CONFIDENCE_THRESHOLD, AutoFixEngine
from baselinebuddy.scanner.engine import read_source

console = Console(stderr=True)


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--threshold",
    type=click.FloatRange(0.0, 1.0),
    default=DEFAULT_CONFIDENCE_THRESHOLD,
    show_default=True,
    help="Minimum fix confidence.",
)
@click.option("--write", "-w", is_flag=True, help="Apply the fixes in place.")
@click.option("--explain", is_flag=True, help="Print a full explanation per fix.")
def fix(file: str, threshold: float, write: bool, explain: bool) -> None:
    """Propose Baseline-friendly replacements for one file."""
    path = Path(file)
    try:
        source = read_source(path)
    except ReadError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    engine = AutoFixEngine(confidence_threshold=threshold)
    proposals = engine.analyze_and_fix(source, str(path))
    if not proposals:
        console.print("[green]No fixes to propose.[/green]")
        return

    table = Table(title="Proposed fixes", show_lines=False)
    table.add_column("Line", justify="right")
    table.add_column("Feature")
    table.add_column("Original", style="red")
    table.add_column("Fixed", style="green")
    table.add_column("Confidence", justify="right")
    for proposal in proposals:
        table.add_row(
            str(proposal.issue.line),
            escape(proposal.issue.feature),
            escape(proposal.fix.original_code),
            escape(proposal.fix.fixed_code),
            f"{proposal.fix.confidence:.0%}",
        )
    Console().print(table)

    if explain:
        for proposal in proposals:
            console.print(f"\n[bold]Line {proposal.issue.line}[/bold]")
            console.print(engine.get_fix_explanation(proposal.fix), markup=False)

    if not write:
        return

    updated = source
    applied = 0
    for proposal in proposals:
        patched = engine.apply_fix(updated, proposal.fix, proposal.issue.line)
        if patched != updated:
            applied += 1
            updated = patched
    if applied:
        path.write_text(updated, encoding="utf-8")
    console.print(f"[green]Applied {applied} fix(es) to {escape(str(path))}[/green]")
