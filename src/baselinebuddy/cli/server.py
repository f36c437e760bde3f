"""CLI command: baselinebuddy server — serve the scan API on localhost."""

from __future__ import annotations

import click
from rich.console import Console
from rich.markup import escape

from baselinebuddy.config import BaselineConfig
from baselinebuddy.errors import ConfigError

console = Console(stderr=True)


@click.command()
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to listen on (default: 8471).",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=None,
    help="File workers used by POST /api/scan.",
)
@click.pass_context
def server(ctx: click.Context, port: int | None, workers: int | None) -> None:
    """Serve the Baseline Buddy HTTP API."""
    try:
        import uvicorn
    except ImportError:
        console.print(
            "[red]Web dependencies not installed.[/red]\n"
            "Install with: pip install baselinebuddy[web]"
        )
        raise SystemExit(1)

    from baselinebuddy.web.app import create_app

    try:
        config = BaselineConfig.load()
    except ConfigError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1)
    if port is not None:
        config.web_port = port
    if workers is not None:
        config.workers = workers
    config.verbose = bool(ctx.obj.get("verbose"))

    app = create_app(config)
    base_url = f"http://{config.web_host}:{config.web_port}"
    console.print(
        f"[bold]Baseline Buddy[/bold] API on [cyan]{base_url}/api[/cyan] "
        f"({len(app.state.registry)} features, {config.workers} worker(s))"
    )
    console.print(f"  [dim]Docs at {base_url}/api/docs, loopback only[/dim]\n")

    uvicorn.run(
        app,
        host=config.web_host,
        port=config.web_port,
        log_level="debug" if config.verbose else "info",
    )
