"""
Reconciliation engine: apply movements to a stock map.

The engine is the sole owner of the stock map for the duration of a replay.
It never raises for data problems; everything it finds is appended to its
error list, and anomalies that make the result untrustworthy set the sticky
critical flag.
"""

import datetime
import sys
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set, Union

from ..core.errors import InvalidTransitionError, StockError
from ..core.events import MovementEvent, MovementKind, ParseResult, QUANTITY_KINDS, TRANSFER_KINDS
from ..core.state import StockLine
from ..logging_config import get_logger

logger = get_logger(__name__)

StockMap = Dict[Optional[int], StockLine]
StockSource = Union[Mapping[Optional[int], StockLine], Iterable[StockLine], None]

# Handler signature: (engine, current_line_or_None, movement) -> None
Handler = Callable[["ReconciliationEngine", Optional[StockLine], MovementEvent], None]


def _create(engine: "ReconciliationEngine", current: Optional[StockLine], mv: MovementEvent) -> None:
    engine._stock[mv.stock_key] = StockLine.from_movement(mv)


def _create_or_change(engine: "ReconciliationEngine", current: Optional[StockLine], mv: MovementEvent) -> None:
    if current is None:
        _create(engine, current, mv)
    else:
        engine._change(current, mv)


def _remove(engine: "ReconciliationEngine", current: Optional[StockLine], mv: MovementEvent) -> None:
    engine._stock.pop(mv.stock_key, None)


HANDLERS: Dict[MovementKind, Handler] = {MovementKind.DELETE: _create, MovementKind.GOODS_RECEIPT: _remove}
HANDLERS.update({kind: _create_or_change for kind in QUANTITY_KINDS})


class ReconciliationEngine:
    """
    Stateful replay of a movement journal onto a stock map.

    Usage:
        engine = ReconciliationEngine(stock, cutoff=date(2024, 1, 1))
        for result in stream:
            engine.apply(result)
        engine.cleanup()
    """

    def __init__(
        self,
        stock: StockSource = None,
        cutoff: Optional[datetime.date] = None,
        handlers: Optional[Mapping[MovementKind, Handler]] = None,
    ) -> None:
        """
        Initialize engine with baseline stock.

        Args:
            stock: Mapping key -> StockLine, or iterable of StockLines where the
                first line per key wins (None = empty)
            cutoff: Movements dated before this only finalize their line
            handlers: Handler table override (must cover every MovementKind)

        Raises:
            InvalidTransitionError: If a movement kind has no handler
        """
        self._handlers = dict(HANDLERS if handlers is None else handlers)
        missing = [kind.name for kind in MovementKind if kind not in self._handlers]
        if missing:
            raise InvalidTransitionError(f"No handler for movement kinds: {', '.join(missing)}")

        if stock is None:
            self._stock: StockMap = {}
        elif isinstance(stock, Mapping):
            self._stock = dict(stock)
        else:
            self._stock = {}
            for line in stock:
                self._stock.setdefault(line.sequence_number, line)

        self._errors: List[StockError] = []
        self._critical = False
        self._last_seq = sys.maxsize
        self._cutoff = cutoff
        self._finalized: Set[int] = set()
        self._history: Dict[int, List[MovementEvent]] = {}

    @property
    def stock(self) -> StockMap:
        return self._stock

    @property
    def errors(self) -> List[StockError]:
        return self._errors

    @property
    def critical(self) -> bool:
        return self._critical

    @property
    def cutoff(self) -> Optional[datetime.date]:
        return self._cutoff

    @property
    def finalized(self) -> Set[int]:
        return set(self._finalized)

    def get(self, key: Optional[int]) -> Optional[StockLine]:
        return self._stock.get(key)

    def applied_movements(self, key: int) -> List[MovementEvent]:
        """Movements applied to a stock key after the cutoff, in journal order."""
        return list(self._history.get(key, []))

    def apply(self, result: Optional[ParseResult]) -> None:
        """
        Apply one journal entry to the current state.

        Missing or failed results are recorded as critical errors and change
        nothing else. Valid movements are checked for ordering and dispatched
        on their kind.
        """
        if result is None:
            self._record(StockError.parse_error("", "Received no movement"), critical=True)
            return
        if not result.ok:
            error = result.error or StockError.parse_error("", "Received no movement")
            self._record(error, critical=True)
            return

        mv = result.value
        if self._is_before_cutoff(mv):
            self._finalize(mv)
            return

        if mv.sequence_number >= self._last_seq:
            self._record(
                StockError.movement_id_out_of_order(mv.sequence_number, mv.raw_line),
                critical=True,
                key=mv.stock_key,
            )
        self._last_seq = mv.sequence_number

        self._history.setdefault(mv.stock_key, []).append(mv)
        self._handlers[mv.kind](self, self._stock.get(mv.stock_key), mv)

    def cleanup(self) -> int:
        """
        Remove depleted lines (quantity <= 0).

        Returns:
            Number of lines removed
        """
        depleted = [key for key, line in self._stock.items() if line.quantity <= 0]
        for key in depleted:
            del self._stock[key]
        logger.debug(f"Cleanup removed {len(depleted)} depleted stock lines")
        return len(depleted)

    def _is_before_cutoff(self, mv: MovementEvent) -> bool:
        return self._cutoff is not None and mv.date is not None and mv.date < self._cutoff

    def _finalize(self, mv: MovementEvent) -> None:
        if mv.stock_key in self._finalized:
            return
        self._finalized.add(mv.stock_key)
        line = self._stock.get(mv.stock_key)
        if line is not None:
            line.location = mv.location

    def _change(self, line: StockLine, mv: MovementEvent) -> None:
        current = line.quantity
        if mv.kind not in TRANSFER_KINDS and current != mv.quantity_total:
            self._record(
                StockError.movement_error(
                    f"Stock record quantity mismatch: stock {mv.stock_key} has {current}, "
                    f"movement {mv.sequence_number} reports {mv.quantity_total} (change {mv.change})",
                    mv.raw_line,
                ),
                critical=False,
                key=mv.stock_key,
            )
        line.quantity_on_hand = current - mv.change
        line.location = mv.location
        line.handling_unit_number = mv.handling_unit_number
        line.pallet_number = mv.handling_unit_number

    def _record(self, error: StockError, critical: bool, key: Optional[int] = None) -> None:
        self._errors.append(error)
        log = get_logger(__name__, trace_id=f"stock-{key}") if key is not None else logger
        if critical:
            self._critical = True
            log.warning(f"Critical replay error: {error}")
        else:
            log.debug(f"Replay error: {error}")
