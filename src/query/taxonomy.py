"""Taxonomy lookups: which fields classify content, and their archive URLs."""

from __future__ import annotations

import re

from folio.config import TaxonomyConfig
from folio.shared.text import slugify

_MULTI_SLASH_RE = re.compile(r"/{2,}")


class TaxonomyService:
    """Answers taxonomy questions from the ``[taxonomy]`` config section."""

    def __init__(self, config: TaxonomyConfig | None = None) -> None:
        self._config = config or TaxonomyConfig()
        self._fields = frozenset(self._config.fields)

    def is_taxonomy(self, field_name: str) -> bool:
        return field_name in self._fields

    def get_url(self, folder: str | None, field_name: str, term: object) -> str:
        """Archive URL for ``term`` within ``folder``: ``/blog/tags/red``."""
        term_text = str(term)
        if self._config.slugify:
            term_text = slugify(term_text)
        url = f"/{folder or ''}/{field_name}/{term_text}"
        return _MULTI_SLASH_RE.sub("/", url)
