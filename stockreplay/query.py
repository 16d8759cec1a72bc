"""
Deterministic query helpers for reconstructed stock.
"""

from collections import Counter
from typing import Dict, Iterable, List, Mapping, Optional

from .core.errors import StockError
from .core.fields import format_value
from .core.state import StockLine

SEARCH_FIELDS = (
    "sequence_number",
    "item_number",
    "quantity_on_hand",
    "location",
    "handling_unit_number",
    "batch1",
)


def _key_order(line: StockLine):
    key = line.sequence_number
    return (key is None, key if key is not None else 0)


def sorted_lines(stock: Mapping[Optional[int], StockLine]) -> List[StockLine]:
    """Lines ordered by sequence number, lines without a key last."""
    return sorted(stock.values(), key=_key_order)


def matches_filter(line: StockLine, text: Optional[str]) -> bool:
    """
    Case-insensitive substring match over the searchable columns.

    An empty filter matches every line.
    """
    needle = (text or "").strip().lower()
    if not needle:
        return True
    haystack = " ".join(format_value(line.get(name)) for name in SEARCH_FIELDS).lower()
    return needle in haystack


def filter_lines(stock: Mapping[Optional[int], StockLine], text: Optional[str]) -> List[StockLine]:
    return [line for line in sorted_lines(stock) if matches_filter(line, text)]


def summarize_errors(errors: Iterable[StockError]) -> Dict[str, int]:
    """Count errors per type, keys sorted by type name."""
    counts = Counter(error.type.value for error in errors)
    return {name: counts[name] for name in sorted(counts)}
