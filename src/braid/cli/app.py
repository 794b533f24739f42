"""
Root Typer application for the braid CLI.

Commands::

    braid serve                 start the HTTP service (uvicorn)
    braid run envelope.json     dispatch an envelope locally, print the response
    braid adapters              list the adapters registered at boot
"""

from __future__ import annotations

import asyncio
import sys

import typer
from rich.table import Table

from braid import __version__
from braid.bootstrap import build_executor
from braid.cli.utils import console, dump_json, err_console, load_json
from braid.core.envelope import parse_envelope
from braid.core.errors import ConfigError, InvalidEnvelopeError
from braid.core.logging import configure_logging
from braid.core.settings import get_settings

app = typer.Typer(
    name="braid",
    help="braid: dispatch batches of actions to system adapters.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"braid {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """braid CLI: serve the dispatch API or run envelopes locally."""


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default from settings)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (default from settings)"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on changes"),
    log_level: str = typer.Option("info", "--log-level"),
) -> None:
    """Start the braid HTTP service."""
    import uvicorn

    settings = get_settings()
    bind_host = host or settings.host
    bind_port = port or settings.port

    console.print(f"[bold green]Starting braid-mcp-server[/bold green] on {bind_host}:{bind_port}")
    uvicorn.run(
        "braid.api:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=log_level,
    )


@app.command("run")
def run(
    source: str = typer.Argument(..., help="Envelope JSON file, or '-' for stdin"),
    compact: bool = typer.Option(False, "--compact", help="Single-line JSON output"),
) -> None:
    """Dispatch one request envelope locally and print the response envelope."""
    settings = get_settings()
    configure_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        service=settings.service_name,
        stream=sys.stderr,
    )

    try:
        envelope = parse_envelope(load_json(source))
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Cannot read envelope:[/red] {e}")
        raise typer.Exit(code=1) from e
    except InvalidEnvelopeError as e:
        err_console.print(f"[red]{e.message}[/red]")
        for err in e.errors:
            err_console.print(f"  {err['loc']}: {err['msg']}")
        raise typer.Exit(code=1) from e

    try:
        executor = build_executor(settings)
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(code=2) from e

    response = asyncio.run(executor.execute(envelope))
    typer.echo(dump_json(response.to_dict(), compact=compact))


@app.command("adapters")
def adapters() -> None:
    """List the adapters the configured boot sequence registers."""
    settings = get_settings()
    configure_logging(level="WARNING", json_format=settings.log_json, stream=sys.stderr)

    try:
        registry = build_executor(settings).registry
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {e.message}")
        raise typer.Exit(code=2) from e

    table = Table(title="Registered adapters")
    table.add_column("System", style="cyan")
    table.add_column("Adapter")
    for system in registry.systems():
        table.add_row(system, type(registry.get(system)).__name__)
    console.print(table)
