"""
Canonical serialization for deterministic hashing.

Reconstructed stock is compared across runs by hashing its canonical JSON
form, so every value must serialize identically regardless of dict order or
decimal scale representation.
"""

import datetime
import json
from decimal import Decimal
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys converted to strings and sorted
    - tuples converted to lists
    - Decimal rendered in plain notation (scale preserved)
    - dates rendered as ISO strings
    """
    if isinstance(obj, dict):
        items = {str(k): v for k, v in obj.items()}
        return {k: canonicalize(items[k]) for k in sorted(items)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, Decimal):
        return format(obj, "f")
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Returns:
        UTF-8 encoded JSON bytes without whitespace
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Deterministic JSON string (for display or storage)."""
    return canonical_json_bytes(obj).decode("utf-8")
