"""
Stock snapshot input and output.

This module provides:
- load_snapshot: Snapshot CSV -> StockLines keyed by sequence number
- write_results: Final stock and error log -> timestamped CSV files
- compute_stock_hash: Deterministic digest of a stock map
"""

from .columns import COLUMN_NAMES, EXPECTED_FIELD_COUNT, STOCK_COLUMNS
from .reader import SnapshotLoad, load_snapshot, parse_stock_line
from .writer import ResultPaths, stock_line_to_csv, write_results
from .digest import compute_stock_hash, serialize_stock

__all__ = [
    "COLUMN_NAMES",
    "EXPECTED_FIELD_COUNT",
    "STOCK_COLUMNS",
    "SnapshotLoad",
    "load_snapshot",
    "parse_stock_line",
    "ResultPaths",
    "stock_line_to_csv",
    "write_results",
    "compute_stock_hash",
    "serialize_stock",
]
