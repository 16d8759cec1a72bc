"""
Movement journal commands: inspect
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from stockreplay.core.errors import JournalReadError
from stockreplay.core.events import MovementKind
from stockreplay.core.fields import format_value
from stockreplay.journal import open_journal

app = typer.Typer()
console = Console()


@app.command()
def inspect(
    movement_path: str = typer.Option(
        "PLSTORE_ES_BESTJOUR_EOD.csv",
        "--movements",
        "-m",
        envvar="STOCKREPLAY_MOVEMENT_FILE",
        help="Path to movement journal CSV",
    ),
    from_seq: Optional[int] = typer.Option(None, "--from", help="Lowest movement sequence number"),
    to_seq: Optional[int] = typer.Option(None, "--to", help="Highest movement sequence number"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Filter by movement kind or code"),
    stock_key: Optional[int] = typer.Option(None, "--stock-key", help="Filter by target stock line"),
    errors_only: bool = typer.Option(False, "--errors-only", "-e", help="Show only unparseable lines"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Parse a movement journal and list its entries.

    Examples:
        stockreplay journal inspect --movements journal.csv --from 100 --to 200
        stockreplay journal inspect --kind INVENTORY_COUNT
        stockreplay journal inspect --errors-only --json
    """
    wanted_kind = None
    if kind:
        try:
            wanted_kind = MovementKind[kind.strip().upper()]
        except KeyError:
            try:
                wanted_kind = MovementKind.from_code(kind)
            except ValueError:
                console.print(f"[red]Error: unknown movement kind:[/red] {kind}")
                raise typer.Exit(2)

    movements = []
    failures = []
    try:
        with open_journal(movement_path) as stream:
            for result in stream:
                if not result.ok:
                    failures.append(result.error)
                    continue
                if errors_only:
                    continue
                mv = result.value
                if from_seq is not None and mv.sequence_number < from_seq:
                    continue
                if to_seq is not None and mv.sequence_number > to_seq:
                    continue
                if wanted_kind is not None and mv.kind is not wanted_kind:
                    continue
                if stock_key is not None and mv.stock_key != stock_key:
                    continue
                movements.append(mv)
    except JournalReadError as e:
        if json_output:
            print(json.dumps({"error": str(e), "path": movement_path}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(
            json.dumps(
                {
                    "movements": [
                        {
                            "sequence_number": mv.sequence_number,
                            "stock_key": mv.stock_key,
                            "kind": mv.kind.name,
                            "quantity_change": format_value(mv.quantity_change),
                            "quantity_total": format_value(mv.quantity_total),
                            "date": format_value(mv.date),
                            "location": mv.location,
                        }
                        for mv in movements
                    ],
                    "count": len(movements),
                    "errors": [error.to_dict() for error in failures],
                },
                indent=2,
            )
        )
        raise typer.Exit(0)

    if movements:
        table = Table(title=f"Movement Journal: {movement_path}")
        table.add_column("Seq", style="cyan", justify="right")
        table.add_column("Stock", style="yellow", justify="right")
        table.add_column("Kind", style="green")
        table.add_column("Change", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Date")
        table.add_column("Location")
        for mv in movements:
            table.add_row(
                str(mv.sequence_number),
                str(mv.stock_key),
                mv.kind.name,
                format_value(mv.quantity_change),
                format_value(mv.quantity_total),
                format_value(mv.date),
                format_value(mv.location),
            )
        console.print(table)
    elif not errors_only:
        console.print("[yellow]No movements match the filters[/yellow]")

    if failures:
        table = Table(title="Unparseable lines")
        table.add_column("Type", style="red")
        table.add_column("Message")
        for error in failures:
            table.add_row(error.type.value, error.message)
        console.print(table)

    console.print(f"\n[bold]Movements:[/bold] {len(movements)}  [bold]Errors:[/bold] {len(failures)}")
    raise typer.Exit(0)
