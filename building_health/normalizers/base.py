"""
Shared helpers for reducing raw open data records.

Upstream records are untyped dicts whose values are mostly strings; these
helpers coerce them the same way everywhere.
"""

import math
from typing import Optional


def to_number(value, default: float = 0) -> float:
    """Parse a numeric field, returning default when missing or malformed."""
    if value in (None, ""):
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def to_int(value) -> Optional[int]:
    """Parse an integer-like field, or None when missing or malformed."""
    if value in (None, ""):
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def first_text(record: dict, *keys: str, default: str = "") -> str:
    """Value of the first key holding a non-empty value."""
    for key in keys:
        value = record.get(key)
        if value not in (None, ""):
            return str(value)
    return default


def lower(record: dict, *keys: str) -> str:
    """Lowercased value of the first non-empty key."""
    return first_text(record, *keys).lower()


def record_id(record: dict, key: str, source: str, index: int) -> str:
    """Record id, falling back to a deterministic '<source>-<index>'."""
    value = record.get(key)
    if value not in (None, ""):
        return str(value)
    return f"{source.lower()}-{index}"


def js_round(value: float) -> int:
    """Round half up (2.5 -> 3), unlike Python's banker's rounding."""
    return int(math.floor(value + 0.5))
