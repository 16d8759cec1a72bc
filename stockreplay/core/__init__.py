"""
Core stock replay primitives.

This module provides the value types shared by every layer:
- MovementEvent / MovementKind: Immutable journal entries
- ParseResult: Parsed movement or the error that prevented parsing
- StockLine: Mutable inventory line
- StockError / ErrorType: Classified error entries
- Canonical: Deterministic serialization
"""

from .events import MovementEvent, MovementKind, ParseResult, QUANTITY_KINDS, TRANSFER_KINDS
from .state import StockLine
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .errors import (
    ErrorType,
    StockError,
    FieldFormatError,
    InvalidTransitionError,
    JournalReadError,
    OutputWriteError,
    SnapshotReadError,
)

__all__ = [
    "MovementEvent",
    "MovementKind",
    "ParseResult",
    "QUANTITY_KINDS",
    "TRANSFER_KINDS",
    "StockLine",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "ErrorType",
    "StockError",
    "FieldFormatError",
    "InvalidTransitionError",
    "JournalReadError",
    "OutputWriteError",
    "SnapshotReadError",
]
