"""Offset/limit windows and page isolation."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from folio.content.models import Record

logger = logging.getLogger(__name__)


def limit_records(
    records: Sequence[Record],
    limit: int | None = None,
    offset: int = 0,
) -> list[Record]:
    """Slice ``[offset, offset + limit)`` keeping the original order.

    A negative offset counts from the end; ``limit=None`` runs to the end.
    """
    if limit is None and offset == 0:
        return list(records)

    start = offset if offset >= 0 else max(len(records) + offset, 0)
    stop = None if limit is None else start + max(limit, 0)
    return list(records[start:stop])


def page_offset(
    count: int,
    page_size: int,
    page: int,
    *,
    fix_out_of_range: bool = False,
) -> int:
    """Offset of ``page`` (1-based); optionally clamp to the valid range.

    Raises:
        ValueError: If ``page_size`` is not positive.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    if fix_out_of_range:
        if page_size * page > count:
            last_page = max(math.ceil(count / page_size), 1)
            if page > last_page:
                logger.debug("Page %d out of range, using last page %d", page, last_page)
                page = last_page
        if page < 1:
            logger.debug("Page %d out of range, using page 1", page)
            page = 1

    return (page - 1) * page_size


def isolate_page(
    records: Sequence[Record],
    page_size: int,
    page: int,
    *,
    fix_out_of_range: bool = False,
) -> list[Record]:
    """Return the records on one page of size ``page_size``.

    A non-positive ``page_size`` yields an empty page.
    """
    if page_size < 1:
        logger.warning("Empty page for non-positive page size %d", page_size)
        return []
    offset = page_offset(len(records), page_size, page, fix_out_of_range=fix_out_of_range)
    return limit_records(records, page_size, offset)
