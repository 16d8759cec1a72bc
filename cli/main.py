#!/usr/bin/env python3
"""
stockreplay CLI - Point-in-time stock reconstruction

Main entrypoint for the stockreplay command-line tool.
"""

from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from cli.commands import journal, replay, stock
from stockreplay.logging_config import setup_logging

app = typer.Typer(
    name="stockreplay",
    help="Reconstruct stock as of a date by replaying the movement journal",
    add_completion=False,
)

console = Console()

app.add_typer(journal.app, name="journal", help="Movement journal operations")
app.add_typer(stock.app, name="stock", help="Stock snapshot operations")

app.command(name="replay")(replay.replay_command)


@app.callback()
def configure(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="DEBUG, INFO, WARNING, ERROR (default: STOCKREPLAY_LOG_LEVEL or INFO)"
    ),
    log_format: Optional[str] = typer.Option(
        None, "--log-format", help="text or json (default: STOCKREPLAY_LOG_FORMAT or text)"
    ),
):
    """Configure logging before any command runs."""
    setup_logging(level=log_level, log_format=log_format)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from stockreplay import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]stockreplay CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()
