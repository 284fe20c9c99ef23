"""Per-field coercion rules shared by the record normalizers.

Every helper accepts any value and returns one that satisfies the field's
declared type, falling back to the supplied default. None of them raise.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Collection, Mapping
from typing import Any, TypeVar

T = TypeVar("T")


def mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def text(value: Any, default: str) -> str:
    return value if isinstance(value, str) else default


def optional_text(value: Any) -> str | None:
    """Strings pass through, finite numbers are stringified, anything else is ``None``."""
    return _scalar_text(value)


def bounded_int(value: Any, low: int, high: int, default: int = 0) -> int:
    """Clamp a numeric value into ``[low, high]``.

    Floats are rounded, numeric strings are accepted, booleans are not
    treated as numbers.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return default
    if isinstance(value, float):
        if math.isnan(value):
            return default
        value = min(float(high), max(float(low), value))
        return int(round(value))
    if isinstance(value, int):
        return min(high, max(low, value))
    return default


def choice(value: Any, allowed: Collection[str], default: str) -> str:
    if isinstance(value, str) and value in allowed:
        return value
    return default


def flag(value: Any, default: bool = False) -> bool:
    parsed = optional_flag(value)
    return default if parsed is None else parsed


def optional_flag(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def text_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = (_scalar_text(item) for item in value)
    return [item for item in items if item is not None]


def record_list(value: Any, build: Callable[[Mapping[str, Any]], T]) -> list[T]:
    if not isinstance(value, list):
        return []
    return [build(item) for item in value if isinstance(item, Mapping)]


def _scalar_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return str(value)
