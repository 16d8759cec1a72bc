"""
Deterministic stock digest utilities.

Ensures the same reconstructed stock always produces the same bytes, so
replays can be compared across runs and machines.
"""

import hashlib
from typing import Mapping, Optional

from ..core.canonical import canonical_json_bytes
from ..core.state import StockLine


def serialize_stock(stock: Mapping[Optional[int], StockLine]) -> bytes:
    """
    Serialize a stock map to canonical bytes.

    Keys are rendered as strings ("None" for lines without a key).
    """
    return canonical_json_bytes({str(key): line.to_dict() for key, line in stock.items()})


def compute_stock_hash(stock: Mapping[Optional[int], StockLine]) -> str:
    """
    Compute SHA-256 hash of a stock map.

    Returns:
        Hex string (64 characters)
    """
    return hashlib.sha256(serialize_stock(stock)).hexdigest()
