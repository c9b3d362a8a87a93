"""
Total accessors for untyped vendor JSON.

Every helper returns None (or an empty container) instead of raising, so a
malformed field only disqualifies the candidate that carries it.
"""
import math
from typing import Any

_TRUE_TOKENS = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_TOKENS = frozenset({"0", "false", "no", "n", "off"})


def as_string(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        # 1001.0 and 1001 identify the same record
        return str(int(value)) if value.is_integer() else str(value)
    return None


def as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = float(text)
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0 if math.isfinite(value) else None
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_TOKENS:
            return True
        if normalized in _FALSE_TOKENS:
            return False
    return None


def as_list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


def as_record(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def iter_records(value: Any) -> list[dict[str, Any]]:
    """Keep only the dict entries of a list value."""
    return [item for item in as_list(value) or [] if isinstance(item, dict)]


def first_string(record: Any, keys: tuple[str, ...]) -> str | None:
    if not isinstance(record, dict):
        return None
    for key in keys:
        value = as_string(record.get(key))
        if value is not None:
            return value
    return None


def first_number(record: Any, keys: tuple[str, ...]) -> float | None:
    if not isinstance(record, dict):
        return None
    for key in keys:
        value = as_number(record.get(key))
        if value is not None:
            return value
    return None


def first_bool(record: Any, keys: tuple[str, ...]) -> bool | None:
    if not isinstance(record, dict):
        return None
    for key in keys:
        value = as_bool(record.get(key))
        if value is not None:
            return value
    return None


def first_list(record: Any, keys: tuple[str, ...]) -> list:
    """Return the first non-empty list found under keys, else an empty list."""
    if not isinstance(record, dict):
        return []
    for key in keys:
        value = as_list(record.get(key))
        if value:
            return value
    return []
