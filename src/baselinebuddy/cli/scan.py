"""CLI command: baselinebuddy scan <path> — Baseline compatibility scan."""

from __future__ import annotations

import dataclasses
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from baselinebuddy.config import BaselineConfig
from baselinebuddy.errors import BaselineBuddyError
from baselinebuddy.report.formatters import (
    exit_code,
    format_html,
    format_json,
    render_text,
)
from baselinebuddy.scanner.engine import ScanEngine
from baselinebuddy.scanner.options import (
    OUTPUT_FORMATS,
    ScanOptions,
    ScanProfile,
    load_profile,
)

logger = logging.getLogger(__name__)

console = Console(stderr=True)

LEVEL_CHOICES = ("limited", "newly", "widely")


def resolve_profile(ctx: click.Context, target: Path) -> ScanProfile:
    """--config if given, else an option file next to the target, else defaults."""
    config_path = ctx.obj.get("config_path")
    if config_path:
        return load_profile(config_path)

    directory = target if target.is_dir() else target.parent
    found = BaselineConfig.load().find_options_file(directory)
    if found is not None:
        logger.debug("Using option file %s", found)
        return load_profile(found)
    return ScanProfile()


def apply_overrides(options: ScanOptions, **overrides) -> ScanOptions:
    """Replace options with every override that was actually given."""
    changes = {k: v for k, v in overrides.items() if v not in (None, ())}
    return dataclasses.replace(options, **changes) if changes else options


@click.command()
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Report format (default: text).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write the report to a file instead of stdout.",
)
@click.option(
    "--level",
    type=click.Choice(LEVEL_CHOICES),
    default=None,
    help="Lowest Baseline tier worth reporting.",
)
@click.option("--include", "-i", multiple=True, help="Glob of files to include.")
@click.option("--exclude", "-e", multiple=True, help="Glob of files to exclude.")
@click.option("--ai", is_flag=True, default=False, help="Attach fix suggestions.")
@click.option("--workers", type=int, default=None, help="Parallel file workers.")
@click.option("--max-files", type=int, default=None, help="Stop after N files.")
@click.pass_context
def scan(
    ctx: click.Context,
    path: str,
    output_format: str | None,
    output: str | None,
    level: str | None,
    include: tuple[str, ...],
    exclude: tuple[str, ...],
    ai: bool,
    workers: int | None,
    max_files: int | None,
) -> None:
    """Scan a file or directory for web features outside Baseline."""
    target = Path(path)
    try:
        profile = resolve_profile(ctx, target)
        config = BaselineConfig.load()
        if workers is None and config.workers > 1:
            workers = config.workers
        if max_files is None and config.max_files:
            max_files = config.max_files
        exclude_patterns = ()
        if exclude:
            exclude_patterns = profile.options.exclude_patterns + exclude
        options = apply_overrides(
            profile.options,
            output_format=output_format,
            baseline_level=level,
            include_patterns=include,
            exclude_patterns=exclude_patterns,
            enable_ai=True if ai else None,
            workers=workers,
            max_files=max_files,
            verbose=True if ctx.obj.get("verbose") else None,
        )

        console.print(
            f"[bold]Baseline Buddy[/bold] scanning [cyan]{escape(path)}[/cyan] "
            f"with profile [cyan]{escape(profile.name)}[/cyan]\n"
        )
        engine = ScanEngine()
        if target.is_dir():
            result = engine.scan_directory(target, options)
        else:
            result = engine.scan_file(target, options)
    except BaselineBuddyError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    if options.output_format == "text":
        if output:
            with open(output, "w", encoding="utf-8") as fh:
                render_text(
                    result, Console(file=fh), show_suggestions=options.enable_ai
                )
        else:
            render_text(result, Console(), show_suggestions=options.enable_ai)
    else:
        if options.output_format == "json":
            report = format_json(result)
        else:
            report = format_html(result)
        if output:
            Path(output).write_text(report, encoding="utf-8")
        else:
            click.echo(report)

    if output:
        console.print(f"[green]Report written to {escape(str(output))}[/green]")
    console.print(
        f"\nScanned {result.files.scanned} files "
        f"({result.files.with_issues} with issues) in {result.duration:.2f}s"
    )

    code = exit_code(result)
    if code:
        sys.exit(code)
