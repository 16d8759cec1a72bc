"""
Stock snapshot commands: show
"""

import json
from typing import Optional

import typer
from rich.console import Console

from stockreplay.core.errors import SnapshotReadError
from stockreplay.core.fields import format_value
from stockreplay.query import filter_lines
from stockreplay.snapshot import load_snapshot

from .replay import stock_table

app = typer.Typer()
console = Console()


@app.command()
def show(
    stock_path: str = typer.Option(
        "PLSTORE_ES_BESTAND_EOD.csv",
        "--stock",
        "-s",
        envvar="STOCKREPLAY_STOCK_FILE",
        help="Path to stock snapshot CSV",
    ),
    text_filter: Optional[str] = typer.Option(None, "--filter", "-f", help="Show lines matching text"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Load a stock snapshot and list its lines.

    Examples:
        stockreplay stock show --stock stock.csv
        stockreplay stock show --filter 0010202 --json
    """
    try:
        snapshot = load_snapshot(stock_path)
    except SnapshotReadError as e:
        if json_output:
            print(json.dumps({"error": str(e), "path": stock_path}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    lines = filter_lines(snapshot.stock, text_filter)
    if json_output:
        print(
            json.dumps(
                {
                    "stock": [line.to_dict() for line in lines],
                    "count": len(lines),
                    "total": len(snapshot.stock),
                    "errors": [error.to_dict() for error in snapshot.errors],
                },
                indent=2,
                default=format_value,
            )
        )
        raise typer.Exit(0)

    console.print(stock_table(lines, f"Stock Snapshot: {stock_path}"))
    if text_filter:
        console.print(f"\n[bold]Records:[/bold] {len(lines)} (filtered from {len(snapshot.stock)})")
    else:
        console.print(f"\n[bold]Records:[/bold] {len(lines)}")
    if snapshot.errors:
        console.print(f"[yellow]{len(snapshot.errors)} rows could not be loaded[/yellow]")
    raise typer.Exit(0)
