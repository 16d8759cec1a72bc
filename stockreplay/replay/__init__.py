"""
Replay system for stock reconstruction.

The reconciliation engine applies a movement journal to a stock snapshot;
the runner wires snapshot, journal and engine together.
"""

from .engine import HANDLERS, ReconciliationEngine
from .runner import ReplayResult, replay, replay_files

__all__ = [
    "HANDLERS",
    "ReconciliationEngine",
    "ReplayResult",
    "replay",
    "replay_files",
]
