"""
Stock snapshot loader.

Reads the 76-column snapshot export into StockLines keyed by sequence
number. Rows that cannot be parsed are reported, not fatal.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..core.errors import FieldFormatError, SnapshotReadError, StockError
from ..core.fields import PARSERS, is_header_line, split_line
from ..core.state import StockLine
from ..logging_config import get_logger
from .columns import EXPECTED_FIELD_COUNT, STOCK_COLUMNS

_CORE_FIELDS = frozenset(name for name in StockLine.__dataclass_fields__ if name != "extra")


@dataclass
class SnapshotLoad:
    """
    Loaded snapshot.

    Fields:
        stock: Lines keyed by sequence number
        errors: Rows that were skipped, in file order
    """
    stock: Dict[Optional[int], StockLine] = field(default_factory=dict)
    errors: List[StockError] = field(default_factory=list)


def parse_stock_line(line: str) -> Tuple[Optional[StockLine], Optional[StockError]]:
    """
    Parse one snapshot row.

    Returns:
        (line, None) on success, (None, error) otherwise
    """
    if line is None or not line.strip():
        return None, StockError.parse_error(line, "CSV line is null or empty")

    raw = line.rstrip("\r\n")
    fields = split_line(raw)
    if len(fields) != EXPECTED_FIELD_COUNT:
        return None, StockError.invalid_field_count(raw, EXPECTED_FIELD_COUNT, len(fields))

    core = {}
    extra = {}
    try:
        for (name, kind), value in zip(STOCK_COLUMNS, fields):
            parsed = PARSERS[kind](value, name)
            if name in _CORE_FIELDS:
                core[name] = parsed
            else:
                extra[name] = parsed
    except FieldFormatError as ex:
        return None, ex.to_stock_error(raw)

    return StockLine(extra=extra, **core), None


def load_snapshot(path: str, encoding: str = "utf-8-sig") -> SnapshotLoad:
    """
    Load a snapshot file.

    A leading header row is skipped. When a key appears twice the first
    line wins and the duplicate is reported.

    Raises:
        SnapshotReadError: If the file cannot be read
    """
    logger = get_logger(__name__, trace_id=path)
    result = SnapshotLoad()

    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            for idx, line in enumerate(f):
                if idx == 0 and is_header_line(line):
                    continue
                if not line.strip():
                    continue
                stock_line, error = parse_stock_line(line)
                if error is not None:
                    result.errors.append(error)
                    continue
                key = stock_line.sequence_number
                if key in result.stock:
                    result.errors.append(
                        StockError.parse_error(line.rstrip("\r\n"), f"Duplicate stock record: {key}")
                    )
                    continue
                result.stock[key] = stock_line
    except (OSError, UnicodeDecodeError) as ex:
        raise SnapshotReadError(f"Failed to read CSV file {path}: {ex}") from ex

    logger.info(f"Loaded {len(result.stock)} stock records ({len(result.errors)} rejected)")
    if result.errors:
        logger.warning(f"Skipped {len(result.errors)} snapshot rows")
    return result
