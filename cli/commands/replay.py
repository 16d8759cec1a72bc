"""
Replay command: reconstruct stock from snapshot and movement journal
"""

import json
from datetime import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from stockreplay.core.errors import JournalReadError, OutputWriteError, SnapshotReadError
from stockreplay.core.fields import format_value
from stockreplay.logging_config import get_logger
from stockreplay.query import filter_lines, summarize_errors
from stockreplay.replay import replay_files
from stockreplay.snapshot import compute_stock_hash, write_results

console = Console()
logger = get_logger(__name__)

MAX_ERROR_ROWS = 20


def stock_table(lines, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Seq", style="cyan", justify="right")
    table.add_column("Item", style="green")
    table.add_column("Qty", justify="right")
    table.add_column("Location", style="yellow")
    table.add_column("Handling Unit")
    table.add_column("Batch")
    for line in lines:
        table.add_row(
            format_value(line.sequence_number),
            format_value(line.item_number),
            format_value(line.quantity_on_hand),
            format_value(line.location),
            format_value(line.handling_unit_number),
            format_value(line.batch1),
        )
    return table


def replay_command(
    stock_path: str = typer.Option(
        "PLSTORE_ES_BESTAND_EOD.csv",
        "--stock",
        "-s",
        envvar="STOCKREPLAY_STOCK_FILE",
        help="Path to stock snapshot CSV",
    ),
    movement_path: str = typer.Option(
        "PLSTORE_ES_BESTJOUR_EOD.csv",
        "--movements",
        "-m",
        envvar="STOCKREPLAY_MOVEMENT_FILE",
        help="Path to movement journal CSV",
    ),
    cutoff: Optional[datetime] = typer.Option(
        None,
        "--date",
        "-d",
        formats=["%Y-%m-%d"],
        help="Stock date: movements before it only finalize their line",
    ),
    output_dir: str = typer.Option(
        "results",
        "--out",
        "-o",
        envvar="STOCKREPLAY_OUTPUT_DIR",
        help="Directory for stocks_*.csv and errors_*.csv",
    ),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=0, help="Apply only the first N movements"),
    text_filter: Optional[str] = typer.Option(None, "--filter", "-f", help="Show stock lines matching text"),
    line_key: Optional[int] = typer.Option(None, "--line", help="Show one stock line and its applied movements"),
    no_write: bool = typer.Option(False, "--no-write", help="Do not write result files"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay a movement journal onto a stock snapshot.

    Exits 1 when the replay hit a critical error, 2 when input or output
    files cannot be read or written.

    Examples:
        stockreplay replay --stock stock.csv --movements journal.csv
        stockreplay replay --date 2024-03-01 --no-write --filter A-100
        stockreplay replay --line 4711 --json
    """
    stock_date = cutoff.date() if cutoff else None
    try:
        if not json_output:
            console.print("[bold]Replaying movement journal...[/bold]")
        result = replay_files(stock_path, movement_path, cutoff=stock_date, limit=limit)

        paths = None
        if not no_write:
            paths = write_results(result.engine.stock, result.errors, output_dir)
    except (SnapshotReadError, JournalReadError) as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)
    except OutputWriteError as e:
        if json_output:
            print(json.dumps({"error": e.error.to_dict()}))
        else:
            console.print(f"[red]Error writing results:[/red] {e.error.message}")
        raise typer.Exit(2)

    engine = result.engine
    stock_hash = compute_stock_hash(engine.stock)
    error_counts = summarize_errors(result.errors)

    if json_output:
        output = {
            "success": not engine.critical,
            "critical": engine.critical,
            "movements_consumed": result.consumed,
            "stock_lines": len(engine.stock),
            "lines_removed": result.removed,
            "lines_finalized": len(engine.finalized),
            "stock_hash": stock_hash,
            "error_counts": error_counts,
            "errors": [error.to_dict() for error in result.errors],
        }
        if paths:
            output["stock_file"] = paths.stock_file
            output["error_file"] = paths.error_file
        if text_filter is not None:
            output["stock"] = [line.to_dict() for line in filter_lines(engine.stock, text_filter)]
        if line_key is not None:
            line = engine.get(line_key)
            output["line"] = line.to_dict() if line else None
            output["line_movements"] = [mv.raw_line for mv in engine.applied_movements(line_key)]
        print(json.dumps(output, indent=2, default=format_value))
    else:
        status = "[red]✗ Replay finished with critical errors[/red]" if engine.critical else (
            "[green]✓ Replay finished[/green]"
        )
        console.print(status)
        console.print(f"  Movements consumed: [cyan]{result.consumed}[/cyan]")
        console.print(f"  Stock lines: [cyan]{len(engine.stock)}[/cyan] (removed {result.removed})")
        if stock_date:
            console.print(f"  Finalized before {stock_date}: {len(engine.finalized)}")
        console.print(f"  Stock hash: [yellow]{stock_hash}[/yellow]")
        if paths:
            console.print(f"  Stock file: [cyan]{paths.stock_file}[/cyan]")
            console.print(f"  Error file: [cyan]{paths.error_file}[/cyan]")

        if result.errors:
            table = Table(title=f"Errors ({len(result.errors)})")
            table.add_column("Type", style="red")
            table.add_column("Message")
            for error in result.errors[:MAX_ERROR_ROWS]:
                table.add_row(error.type.value, error.message)
            console.print(table)
            if len(result.errors) > MAX_ERROR_ROWS:
                console.print(f"  ... {len(result.errors) - MAX_ERROR_ROWS} more in error file")

        if text_filter is not None:
            lines = filter_lines(engine.stock, text_filter)
            console.print(stock_table(lines, f"Stock matching '{text_filter}' ({len(lines)} of {len(engine.stock)})"))

        if line_key is not None:
            line = engine.get(line_key)
            if line is None:
                console.print(f"[yellow]Stock line {line_key} not in reconstructed stock[/yellow]")
            else:
                console.print(stock_table([line], f"Stock line {line_key}"))
            movements = engine.applied_movements(line_key)
            table = Table(title=f"Applied movements for {line_key}")
            table.add_column("Seq", style="cyan", justify="right")
            table.add_column("Kind", style="green")
            table.add_column("Change", justify="right")
            table.add_column("Total", justify="right")
            table.add_column("Date")
            table.add_column("Location", style="yellow")
            for mv in movements:
                table.add_row(
                    str(mv.sequence_number),
                    mv.kind.name,
                    format_value(mv.quantity_change),
                    format_value(mv.quantity_total),
                    format_value(mv.date),
                    format_value(mv.location),
                )
            console.print(table)

    logger.info(f"Replay command finished: critical={engine.critical}")
    raise typer.Exit(1 if engine.critical else 0)
