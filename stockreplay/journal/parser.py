"""
Movement journal line parser.

Each journal line holds 22 comma-separated fields. Parsing never raises;
every problem becomes a failed ParseResult carrying a StockError.
"""

from typing import List, Tuple

from ..core.errors import FieldFormatError, StockError
from ..core.events import MovementEvent, MovementKind, ParseResult
from ..core.fields import PARSERS, parse_str, split_line

# (attribute, type) in journal column order
MOVEMENT_COLUMNS: List[Tuple[str, str]] = [
    ("sequence_number", "int"),
    ("stock_key", "int"),
    ("handling_unit_number", "str"),
    ("location", "str"),
    ("item_number", "str"),
    ("serial_number", "str"),
    ("batch1", "str"),
    ("batch2", "str"),
    ("quantity_change", "decimal"),
    ("quantity_total", "decimal"),
    ("weight_change", "decimal"),
    ("client", "int"),
    ("kind", "kind"),
    ("process_code", "int"),
    ("date", "date"),
    ("time", "str"),
    ("user", "str"),
    ("print_flag", "str"),
    ("document1", "str"),
    ("document2", "str"),
    ("customer_order_number", "str"),
    ("customer_order_position", "str"),
]

EXPECTED_FIELD_COUNT = len(MOVEMENT_COLUMNS)


def parse_movement_line(line: str) -> ParseResult:
    """
    Parse one journal line.

    Args:
        line: Raw CSV line (trailing newline allowed)

    Returns:
        ParseResult with the movement, or the error that prevented parsing
    """
    if line is None or not line.strip():
        return ParseResult.failure(StockError.parse_error(line, "CSV line is null or empty"))

    raw = line.rstrip("\r\n")
    fields = split_line(raw)
    if len(fields) != EXPECTED_FIELD_COUNT:
        return ParseResult.failure(StockError.invalid_field_count(raw, EXPECTED_FIELD_COUNT, len(fields)))

    values = {}
    try:
        for (name, kind), value in zip(MOVEMENT_COLUMNS, fields):
            if kind == "kind":
                code = parse_str(value)
                if code is None:
                    return ParseResult.failure(StockError.invalid_event(raw, value.strip()))
                try:
                    values[name] = MovementKind.from_code(code)
                except ValueError:
                    return ParseResult.failure(StockError.invalid_event(raw, code))
                continue
            values[name] = PARSERS[kind](value, name)
    except FieldFormatError as ex:
        return ParseResult.failure(ex.to_stock_error(raw))

    for required in ("sequence_number", "stock_key"):
        if values[required] is None:
            return ParseResult.failure(
                StockError.parse_error(raw, f"Failed to parse movement: missing {required}")
            )

    return ParseResult.success(MovementEvent(raw_line=raw, **values))
