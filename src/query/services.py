"""High-level listing helpers built on ContentSet."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from folio.config import FolioConfig
from folio.content.models import Record, SystemField
from folio.query.contentset import ContentSet

logger = logging.getLogger(__name__)

NO_RESULTS: list[Record] = [{"no_results": True}]


def select_by_url(records: Sequence[Record], from_urls: str | Sequence[str]) -> list[Record]:
    """Pick the records at the given URLs (pipe-separated string or list)."""
    if isinstance(from_urls, str):
        wanted = [url.strip() for url in from_urls.split("|")]
    else:
        wanted = [str(url).strip() for url in from_urls]
    wanted_set = {url for url in wanted if url}
    return [record for record in records if record.get(SystemField.URL) in wanted_set]


def get_content(
    records: Sequence[Record],
    from_urls: str | Sequence[str],
    *,
    show_hidden: bool = False,
    show_past: bool = True,
    show_future: bool = False,
    conditions: str | dict[str, Any] | None = None,
    parse_content: bool = False,
    config: FolioConfig | None = None,
    **collaborators: Any,
) -> list[Record]:
    """Fetch, filter and materialize the content living at ``from_urls``.

    Returns ``[{"no_results": True}]`` when nothing survives filtering so
    a template loop can render its empty state.

    Args:
        records: The full record collection to select from.
        from_urls: URL or ``|``-separated URLs to fetch.
        show_hidden: Include records under ``_``-prefixed paths.
        show_past: Include records dated before now.
        show_future: Include records dated after now.
        conditions: Condition string or structured conditions.
        parse_content: Load and render each record's content body.
        config: Configuration snapshot.
        **collaborators: Passed to ``ContentSet`` (renderer, content_store, ...).
    """
    if not from_urls:
        return []

    content_set = ContentSet(select_by_url(records, from_urls), config=config, **collaborators)
    content_set.filter(
        {
            "show_all": show_hidden,
            "show_past": show_past,
            "show_future": show_future,
            "type": "all",
            "conditions": conditions.strip() if isinstance(conditions, str) else conditions,
        }
    )

    if not content_set.count():
        logger.debug("No content left for %s", from_urls)
        return [dict(item) for item in NO_RESULTS]

    return content_set.get(parse_content)
