"""Record ordering with field aliases, direction inference and shuffling."""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from functools import cmp_to_key

from folio.content.models import Record, SystemField
from folio.query.compare import compare_values

logger = logging.getLogger(__name__)

RANDOM = "random"
ASC = "asc"
DESC = "desc"

# User-facing sort names mapped to the record field they read.
SORT_ALIASES: dict[str, str] = {
    "order_key": SystemField.ORDER_KEY,
    "number": SystemField.ORDER_KEY,
    "datestamp": SystemField.DATESTAMP,
    "date": SystemField.DATESTAMP,
    "folder": SystemField.FOLDER,
    "distance": "distance_km",
}

_ORDER_KEY_ALIASES = frozenset({"order_key", "number"})


def resolve_sort_field(field: str) -> str:
    """Map an alias to the underlying record field; other names pass through."""
    return SORT_ALIASES.get(field, field)


def sort_records(
    records: Sequence[Record],
    field: str = "order_key",
    direction: str | None = None,
    *,
    rng: random.Random | None = None,
) -> list[Record]:
    """Return ``records`` ordered by ``field``.

    ``"random"`` shuffles.  Otherwise the sort is stable and ascending,
    then reversed for ``"desc"``.  Without a direction, date-ordered
    records sorted by order key (the first sorted record carries both an
    order key and a datestamp) default to descending; everything else
    defaults to ascending.
    """
    ordered = list(records)
    if not ordered:
        return ordered

    if field == RANDOM:
        (rng or random).shuffle(ordered)
        return ordered

    key_field = resolve_sort_field(field)
    ordered.sort(
        key=cmp_to_key(lambda a, b: compare_values(a.get(key_field), b.get(key_field)))
    )

    if direction is None:
        direction = _default_direction(field, ordered[0])

    logger.debug("Sorted %d records by %s (%s)", len(ordered), key_field, direction)
    if direction == DESC:
        ordered.reverse()
    return ordered


def _default_direction(field: str, sample: Record) -> str:
    if (
        field in _ORDER_KEY_ALIASES
        and sample.get(SystemField.ORDER_KEY)
        and sample.get(SystemField.DATESTAMP)
    ):
        return DESC
    return ASC
