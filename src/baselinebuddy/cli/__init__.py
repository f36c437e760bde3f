"""CLI entry point — Click group with global options."""

from __future__ import annotations

import logging

import click

from baselinebuddy import __version__


@click.group()
@click.version_option(version=__version__, prog_name="baselinebuddy")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Path to a YAML option file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.pass_context
def main(ctx: click.Context, config: str | None, verbose: bool) -> None:
    """Baseline Buddy — check web code against Baseline browser support."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _register_commands() -> None:
    from baselinebuddy.cli.ci import ci  # noqa: F811
    from baselinebuddy.cli.features import explain, features  # noqa: F811
    from baselinebuddy.cli.fix import fix  # noqa: F811
    from baselinebuddy.cli.scan import scan  # noqa: F811
    from baselinebuddy.cli.server import server  # noqa: F811

    main.add_command(scan)
    main.add_command(features)
    main.add_command(explain)
    main.add_command(fix)
    main.add_command(ci)
    main.add_command(server)


_register_commands()
