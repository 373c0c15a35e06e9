"""Type-aware ordering of two field values."""

from __future__ import annotations

import re
from datetime import UTC, date, datetime, time

from folio.content.models import is_scalar

_NUMERIC_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")


def compare_values(value_1: object, value_2: object) -> int:
    """Three-way compare for sorting: negative, zero, or positive.

    Rules, in order:
    - None sorts before any concrete value.
    - Sequences and mappings sort after scalars; two of them tie.
    - Numbers, booleans, dates and numeric strings compare numerically.
    - Everything else compares as case-insensitive text.
    """
    if value_1 is None or value_2 is None:
        if value_1 is None and value_2 is None:
            return 0
        return -1 if value_1 is None else 1

    scalar_1 = is_scalar(value_1)
    scalar_2 = is_scalar(value_2)
    if not (scalar_1 and scalar_2):
        if scalar_1 == scalar_2:
            return 0
        return -1 if scalar_1 else 1

    number_1 = _as_number(value_1)
    number_2 = _as_number(value_2)
    if number_1 is not None and number_2 is not None:
        return _cmp(number_1, number_2)

    return _cmp(str(value_1).casefold(), str(value_2).casefold())


def _as_number(value: object) -> float | None:
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.timestamp()
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC).timestamp()
    if isinstance(value, str) and _NUMERIC_RE.match(value.strip()):
        return float(value)
    return None


def _cmp(a: float | str, b: float | str) -> int:
    return (a > b) - (a < b)
