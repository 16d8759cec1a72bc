"""
Movement journal reading.

This module provides:
- parse_movement_line: One CSV line -> ParseResult
- MovementStream: Lazy, closeable iteration over a journal file
"""

from .parser import EXPECTED_FIELD_COUNT, MOVEMENT_COLUMNS, parse_movement_line
from .stream import MovementStream, open_journal

__all__ = [
    "EXPECTED_FIELD_COUNT",
    "MOVEMENT_COLUMNS",
    "parse_movement_line",
    "MovementStream",
    "open_journal",
]
