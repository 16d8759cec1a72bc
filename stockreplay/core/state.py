"""
Stock line model for stock replay.

A StockLine is one inventory position. The reconciliation engine touches
only the core attributes; every other snapshot column travels in `extra`.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Optional

from .events import MovementEvent


@dataclass
class StockLine:
    """
    Mutable inventory line keyed by sequence_number.

    Fields:
        sequence_number: Stable key assigned by the source system
        quantity_on_hand: Current quantity (may be zero or negative mid-replay)
        extra: Pass-through snapshot columns by column name
    """
    sequence_number: Optional[int]
    item_number: Optional[str] = None
    client: Optional[int] = None
    batch1: Optional[str] = None
    batch2: Optional[str] = None
    serial_number: Optional[str] = None
    customer_order_number: Optional[str] = None
    customer_order_position: Optional[str] = None
    pallet_number: Optional[str] = None
    handling_unit_number: Optional[str] = None
    location: Optional[str] = None
    quantity_on_hand: Optional[Decimal] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_movement(movement: MovementEvent) -> "StockLine":
        """
        Synthesize the line a movement must have been booked against.

        The pre-movement quantity is the reported total minus the delta.
        """
        return StockLine(
            sequence_number=movement.stock_key,
            item_number=movement.item_number,
            client=movement.client,
            batch1=movement.batch1,
            batch2=movement.batch2,
            serial_number=movement.serial_number,
            customer_order_number=movement.customer_order_number,
            customer_order_position=movement.customer_order_position,
            pallet_number=movement.handling_unit_number,
            handling_unit_number=movement.handling_unit_number,
            location=movement.location,
            quantity_on_hand=movement.total - movement.change,
        )

    @property
    def quantity(self) -> Decimal:
        """Quantity on hand with None folded to zero."""
        return self.quantity_on_hand if self.quantity_on_hand is not None else Decimal(0)

    def get(self, name: str) -> Any:
        """Look up a column value by name, core attribute or pass-through."""
        if name != "extra" and name in self.__dataclass_fields__:
            return getattr(self, name)
        return self.extra.get(name)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "sequence_number": self.sequence_number,
            "item_number": self.item_number,
            "client": self.client,
            "batch1": self.batch1,
            "batch2": self.batch2,
            "serial_number": self.serial_number,
            "customer_order_number": self.customer_order_number,
            "customer_order_position": self.customer_order_position,
            "pallet_number": self.pallet_number,
            "handling_unit_number": self.handling_unit_number,
            "location": self.location,
            "quantity_on_hand": self.quantity_on_hand,
        }
        data["extra"] = dict(self.extra)
        return data
