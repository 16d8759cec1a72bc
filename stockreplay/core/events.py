"""
Movement model for stock replay.

Movements are immutable journal entries. Each one targets a single stock
line by its sequence number.
"""

from dataclasses import dataclass
import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from .errors import StockError


class MovementKind(Enum):
    """Journal event kinds with their source system codes."""

    MOVEMENT_IN = "BEWGZU"
    DELETE = "LOESCH"
    MOVEMENT_OUT = "BEWGAB"
    MOVEMENT_NEUTRAL = "BEWGNG"
    GOODS_RECEIPT = "WAREIN"
    BATCH_CORRECTION_IN = "MGKOZU"
    BATCH_CORRECTION_OUT = "MGKOAB"
    INVENTORY_COUNT = "INVZHL"

    @property
    def code(self) -> str:
        return self.value

    @classmethod
    def from_code(cls, value: str) -> "MovementKind":
        """
        Resolve a journal code (case-insensitive).

        Raises:
            ValueError: If the code is unknown
        """
        upper = value.strip().upper()
        for kind in cls:
            if kind.value == upper:
                return kind
        raise ValueError(value)


# Kinds that shift stock between places; their reported total is not
# comparable to the line's current quantity.
TRANSFER_KINDS = frozenset(
    {MovementKind.MOVEMENT_IN, MovementKind.MOVEMENT_OUT, MovementKind.MOVEMENT_NEUTRAL}
)

QUANTITY_KINDS = frozenset(
    {
        MovementKind.MOVEMENT_IN,
        MovementKind.MOVEMENT_OUT,
        MovementKind.MOVEMENT_NEUTRAL,
        MovementKind.BATCH_CORRECTION_IN,
        MovementKind.BATCH_CORRECTION_OUT,
        MovementKind.INVENTORY_COUNT,
    }
)


@dataclass(frozen=True)
class MovementEvent:
    """
    Immutable movement record.

    Fields:
        sequence_number: Journal sequence (strictly decreasing in file order)
        stock_key: Sequence number of the targeted stock line
        kind: Movement kind
        quantity_change: Signed delta (None means zero)
        quantity_total: Resulting quantity as reported by the journal
        date: Booking date
        raw_line: Source text, kept for error reports
    """
    sequence_number: int
    stock_key: int
    kind: MovementKind
    quantity_change: Optional[Decimal] = None
    quantity_total: Optional[Decimal] = None
    handling_unit_number: Optional[str] = None
    location: Optional[str] = None
    item_number: Optional[str] = None
    serial_number: Optional[str] = None
    batch1: Optional[str] = None
    batch2: Optional[str] = None
    weight_change: Optional[Decimal] = None
    client: Optional[int] = None
    process_code: Optional[int] = None
    date: Optional[datetime.date] = None
    time: Optional[str] = None
    user: Optional[str] = None
    print_flag: Optional[str] = None
    document1: Optional[str] = None
    document2: Optional[str] = None
    customer_order_number: Optional[str] = None
    customer_order_position: Optional[str] = None
    raw_line: str = ""

    @property
    def change(self) -> Decimal:
        """Quantity change with None folded to zero."""
        return self.quantity_change if self.quantity_change is not None else Decimal(0)

    @property
    def total(self) -> Decimal:
        """Reported total with None folded to zero."""
        return self.quantity_total if self.quantity_total is not None else Decimal(0)


@dataclass(frozen=True)
class ParseResult:
    """
    Outcome of parsing one journal line.

    Exactly one of value/error is set.
    """
    value: Optional[MovementEvent] = None
    error: Optional[StockError] = None

    @property
    def ok(self) -> bool:
        return self.value is not None and self.error is None

    @staticmethod
    def success(event: MovementEvent) -> "ParseResult":
        return ParseResult(value=event)

    @staticmethod
    def failure(error: StockError) -> "ParseResult":
        return ParseResult(error=error)
