"""
Replay runner: reconstruct stock from a snapshot and a movement journal.

Applies every journal entry in file order, then runs the cleanup pass once.
"""

import datetime
from dataclasses import dataclass, field
from itertools import islice
from typing import Iterable, List, Optional

from ..core.errors import StockError
from ..core.events import ParseResult
from ..journal.stream import open_journal
from ..logging_config import get_logger
from ..snapshot.reader import load_snapshot
from .engine import ReconciliationEngine, StockSource

logger = get_logger(__name__)


@dataclass(frozen=True)
class ReplayResult:
    """
    Result of a replay run.

    Fields:
        engine: Engine holding the final stock, errors and critical flag
        consumed: Number of journal entries applied
        removed: Number of lines dropped by cleanup
        load_errors: Snapshot rows that could not be loaded
    """
    engine: ReconciliationEngine
    consumed: int
    removed: int
    load_errors: List[StockError] = field(default_factory=list)

    @property
    def critical(self) -> bool:
        return self.engine.critical

    @property
    def errors(self) -> List[StockError]:
        """Snapshot load errors followed by replay errors."""
        return list(self.load_errors) + list(self.engine.errors)


def replay(
    stock: StockSource,
    movements: Iterable[Optional[ParseResult]],
    cutoff: Optional[datetime.date] = None,
    limit: Optional[int] = None,
) -> ReplayResult:
    """
    Replay movements onto stock.

    Args:
        stock: Baseline stock (mapping or iterable of lines)
        movements: Parse results in journal order
        cutoff: Optional finalization date
        limit: Apply only the first N entries (None = all)

    Returns:
        ReplayResult after cleanup
    """
    engine = ReconciliationEngine(stock, cutoff=cutoff)
    if limit is not None:
        movements = islice(movements, limit)

    count = 0
    for result in movements:
        engine.apply(result)
        count += 1

    before = len(engine.stock)
    removed = engine.cleanup()
    logger.info(
        f"Replayed {count} movements: errors={len(engine.errors)} critical={engine.critical} "
        f"lines={before}->{len(engine.stock)}"
    )
    return ReplayResult(engine=engine, consumed=count, removed=removed)


def replay_files(
    stock_path: str,
    movement_path: str,
    cutoff: Optional[datetime.date] = None,
    limit: Optional[int] = None,
) -> ReplayResult:
    """
    Load a snapshot file and replay a journal file onto it.

    Raises:
        SnapshotReadError: If the snapshot cannot be read
        JournalReadError: If the journal cannot be read
    """
    snapshot = load_snapshot(stock_path)
    with open_journal(movement_path) as stream:
        result = replay(snapshot.stock, stream, cutoff=cutoff, limit=limit)
    return ReplayResult(
        engine=result.engine,
        consumed=result.consumed,
        removed=result.removed,
        load_errors=list(snapshot.errors),
    )
