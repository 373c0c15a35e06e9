"""ContentSet: the query pipeline over one request's content records.

Typical use from a template layer::

    content_set = ContentSet(records, config=config)
    content_set.filter({"folders": "blog", "show_all": False})
    content_set.sort("date")
    content_set.isolate_page(10, page)
    for record in content_set.get(parse_content=True):
        ...

Each stage replaces the internal list with a new one; records handed
in are never modified.  ``supplement`` and ``prepare`` run at most once
per set no matter how often ``get`` is called.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from folio.config import FolioConfig
from folio.content.models import Record, SystemField, unique_by_url
from folio.content.render import ContentRenderer, TemplateRenderer
from folio.content.store import ContentStore, FileContentStore, split_front_matter
from folio.query.filters import FilterEngine, FilterSpec
from folio.query.pagination import isolate_page, limit_records
from folio.query.sorting import sort_records
from folio.query.supplement import SupplementContext, Supplementer
from folio.query.taxonomy import TaxonomyService
from folio.shared.request import RequestContext

logger = logging.getLogger(__name__)


class ContentSet:
    """An ordered, URL-unique collection of content records.

    Collaborators default to implementations built from ``config``;
    pass your own to swap the content store, renderer, request context
    or clock.
    """

    def __init__(
        self,
        records: object,
        *,
        config: FolioConfig | None = None,
        taxonomy: TaxonomyService | None = None,
        renderer: ContentRenderer | None = None,
        content_store: ContentStore | None = None,
        request: RequestContext | None = None,
        now: datetime | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._config = config or FolioConfig()
        self._taxonomy = taxonomy or TaxonomyService(self._config.taxonomy)
        self._renderer = renderer or TemplateRenderer(self._config.content.default_format)
        self._content_store = content_store or FileContentStore(self._config.content.base_path)
        self._request = request or RequestContext()
        self._now = now
        self._rng = rng

        self._records: list[Record] = unique_by_url(records)
        self._prepared = False
        self._supplemented = False

    @property
    def records(self) -> tuple[Record, ...]:
        """Current records without running supplement/prepare."""
        return tuple(self._records)

    @property
    def prepared(self) -> bool:
        return self._prepared

    @property
    def supplemented(self) -> bool:
        return self._supplemented

    def count(self) -> int:
        return len(self._records)

    def __len__(self) -> int:
        return self.count()

    # -- Pipeline stages -----------------------------------------------------

    def filter(self, spec: FilterSpec | Mapping[str, Any] | None) -> None:
        """Keep only the records passing every active predicate in ``spec``."""
        if not self._records:
            return
        engine = FilterEngine(self._config, taxonomy=self._taxonomy, now=self._now)
        self._records = engine.apply(self._records, spec)

    def sort(self, field: str = "order_key", direction: str | None = None) -> None:
        """Order records by ``field``; see ``sort_records`` for the rules."""
        self._records = sort_records(self._records, field, direction, rng=self._rng)

    def limit(self, limit: int | None = None, offset: int = 0) -> None:
        """Keep the ``[offset, offset + limit)`` window."""
        self._records = limit_records(self._records, limit, offset)

    def isolate_page(self, page_size: int, page: int) -> None:
        """Keep one page, clamping out-of-range pages when configured."""
        self._records = isolate_page(
            self._records,
            page_size,
            page,
            fix_out_of_range=self._config.fix_out_of_range_pagination,
        )

    def supplement(self, context: SupplementContext | Mapping[str, Any] | None = None) -> None:
        """Add derived fields and global defaults to every record, once."""
        if self._supplemented:
            return
        self._supplemented = True

        supplementer = Supplementer(
            self._config,
            taxonomy=self._taxonomy,
            renderer=self._renderer,
            request=self._request,
        )
        self._records = supplementer.apply(self._records, context)

    def prepare(self, parse_content: bool = True) -> None:
        """Add loop context (first/last/count/total_results), once.

        With ``parse_content``, records that reference a source file get
        ``content_raw`` (the body after the front matter) and ``content``
        (the rendered body).  Read errors from the content store propagate.
        """
        if self._prepared:
            return
        self._prepared = True

        total = len(self._records)
        prepared: list[Record] = []
        for position, record in enumerate(self._records, start=1):
            data = dict(record)
            data["first"] = position == 1
            data["last"] = position == total
            data["count"] = position
            data["total_results"] = total

            file_ref = record.get(SystemField.FILE)
            if parse_content and file_ref:
                _, body = split_front_matter(self._content_store.read_raw_body(file_ref))
                data["content_raw"] = body
                data["content"] = self._renderer.render(
                    body, record, record.get(SystemField.CONTENT_TYPE)
                )

            prepared.append(data)

        self._records = prepared

    def get(self, parse_content: bool = True, supplement: bool = True) -> list[Record]:
        """Supplement (optionally) and prepare, then return the final records."""
        if supplement:
            self.supplement()
        self.prepare(parse_content)
        return list(self._records)
