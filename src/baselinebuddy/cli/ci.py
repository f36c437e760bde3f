"""CLI command: baselinebuddy ci <directory> — pass/fail check for pipelines."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from baselinebuddy.errors import BaselineBuddyError
from baselinebuddy.report.ci import (
    BaselineChecker,
    gitlab_exports,
    pr_comment,
    profile_from_env,
    write_github_output,
)
from baselinebuddy.report.formatters import format_html, format_json
from baselinebuddy.scanner.options import load_profile

console = Console(stderr=True)


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False))
@click.option(
    "--files",
    "-F",
    multiple=True,
    type=click.Path(),
    help="Only check these files (e.g. the files changed in a PR).",
)
@click.option(
    "--comment",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write a markdown PR comment to this file.",
)
@click.option(
    "--json-report",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the JSON report here.",
)
@click.option(
    "--html-report",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write the HTML report here.",
)
@click.option("--gitlab", is_flag=True, help="Print GitLab export lines.")
@click.pass_context
def ci(
    ctx: click.Context,
    directory: str,
    files: tuple[str, ...],
    comment: str | None,
    json_report: str | None,
    html_report: str | None,
    gitlab: bool,
) -> None:
    """Check a repository and fail the job on Baseline problems.

    Options come from --config, else from BASELINE_* environment variables.
    """
    config_path = ctx.obj.get("config_path")
    checker = BaselineChecker()
    try:
        profile = load_profile(config_path) if config_path else profile_from_env()
        if files:
            outcome = checker.check_files(
                [Path(directory) / f for f in files], profile
            )
        else:
            outcome = checker.check_directory(directory, profile)
    except BaselineBuddyError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)

    click.echo(outcome.summary, nl=False)
    write_github_output(outcome)

    if comment:
        Path(comment).write_text(pr_comment(outcome.result, profile), encoding="utf-8")
    if json_report:
        Path(json_report).write_text(format_json(outcome.result), encoding="utf-8")
    if html_report:
        Path(html_report).write_text(format_html(outcome.result), encoding="utf-8")
    if gitlab:
        for line in gitlab_exports(outcome):
            click.echo(line)

    if not outcome.success:
        sys.exit(1)
