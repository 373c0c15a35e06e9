"""Derived per-record fields: location, pop-ups, contextual URLs, list helpers.

Every record passed through ``Supplementer.apply`` comes back as a new
dict; the input records are never modified.  Process-wide default
fields from the config are merged underneath, so a record's own values
win on collisions.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel

from folio.config import FolioConfig
from folio.content.models import Record, SystemField, is_scalar
from folio.content.render import ContentRenderer, TemplateRenderer
from folio.query.taxonomy import TaxonomyService
from folio.shared.geo import Point, distance_km, km_to_miles, parse_coordinates
from folio.shared.request import RequestContext
from folio.shared.text import make_sentence_list, strip_order_keys

logger = logging.getLogger(__name__)


class SupplementContext(BaseModel):
    """Per-call supplement options.

    ``list_helpers`` and ``context_urls`` fall back to the ``[supplement]``
    config section when left unset.
    """

    locate_with: str | None = None
    center_point: str | None = None
    pop_up_template: str | None = None
    list_helpers: bool | None = None
    context_urls: bool | None = None


class Supplementer:
    """Adds computed fields to each record."""

    def __init__(
        self,
        config: FolioConfig | None = None,
        *,
        taxonomy: TaxonomyService | None = None,
        renderer: ContentRenderer | None = None,
        request: RequestContext | None = None,
    ) -> None:
        self._config = config or FolioConfig()
        self._taxonomy = taxonomy or TaxonomyService(self._config.taxonomy)
        self._renderer = renderer or TemplateRenderer(self._config.content.default_format)
        self._request = request or RequestContext()

    def apply(
        self,
        records: Sequence[Record],
        context: SupplementContext | Mapping[str, Any] | None = None,
    ) -> list[Record]:
        """Return supplemented copies of ``records``."""
        context = _coerce_context(context)
        list_helpers = _pick(context.list_helpers, self._config.supplement.list_helpers)
        context_urls = _pick(context.context_urls, self._config.supplement.context_urls)

        center: Point | None = None
        if context.center_point:
            center = parse_coordinates(context.center_point)
            if center is None:
                logger.warning("Ignoring malformed center point %r", context.center_point)

        # Contextual URLs describe the current request, not the record.
        url_fields: dict[str, str] = {}
        if context_urls:
            raw_url = self._request.current_resource_uri()
            url_fields = {"raw_url": raw_url, "page_url": strip_order_keys(raw_url)}

        defaults = self._config.get_all()
        supplemented: list[Record] = []
        for record in records:
            data = dict(record)

            if context.locate_with:
                self._locate(data, context.locate_with, center)

            if context.pop_up_template:
                data["marker_pop_up_content"] = self._renderer.render(
                    context.pop_up_template, data, "html"
                )

            data.update(url_fields)

            if list_helpers:
                self._add_list_helpers(data)

            supplemented.append({**defaults, **data})

        logger.debug("Supplemented %d records", len(supplemented))
        return supplemented

    def _locate(self, data: Record, locate_with: str, center: Point | None) -> None:
        location = data.get(locate_with)
        if not isinstance(location, Mapping):
            return
        latitude = location.get("latitude")
        longitude = location.get("longitude")
        if not latitude or not longitude:
            return

        data["latitude"] = latitude
        data["longitude"] = longitude
        data["coordinates"] = f"{latitude},{longitude}"

        if center is not None:
            try:
                location_point = (float(latitude), float(longitude))
            except (TypeError, ValueError):
                logger.warning("Cannot measure distance to non-numeric location %r", location)
                return
            km = distance_km(center, location_point)
            data["distance_km"] = km
            data["distance_mi"] = km_to_miles(km)

    def _add_list_helpers(self, data: Record) -> None:
        folder = data.get(SystemField.FOLDER)
        for key, value in list(data.items()):
            if not isinstance(value, list) or not value or not is_scalar(value[0]):
                continue

            data.update(_list_variants(key, value))

            if self._taxonomy.is_taxonomy(key):
                linked = [
                    f'<a href="{self._taxonomy.get_url(folder, key, item)}">{item}</a>'
                    for item in value
                ]
                data.update(_list_variants(key, linked, linked=True))


def _list_variants(field: str, items: list[Any], *, linked: bool = False) -> dict[str, str]:
    """The joined forms of a list: ``tags_list``, ``tags_ordered_list``, ...

    Linked variants take a ``_url`` infix (``tags_ordered_url_list``) and
    have no option list.
    """
    words = [str(item) for item in items]
    url = "_url" if linked else ""

    variants = {
        f"{field}{url}_list": ", ".join(words),
        f"{field}_spaced{url}_list": " ".join(words),
        f"{field}_ordered{url}_list": "<ol><li>" + "</li><li>".join(words) + "</li></ol>",
        f"{field}_unordered{url}_list": "<ul><li>" + "</li><li>".join(words) + "</li></ul>",
        f"{field}_sentence{url}_list": make_sentence_list(words),
        f"{field}_ampersand_sentence{url}_list": make_sentence_list(words, "&", oxford_comma=False),
    }
    if not linked:
        variants[f"{field}_option_list"] = "|".join(words)
    return variants


def _pick(value: bool | None, fallback: bool) -> bool:
    return fallback if value is None else value


def _coerce_context(context: SupplementContext | Mapping[str, Any] | None) -> SupplementContext:
    if isinstance(context, SupplementContext):
        return context
    if isinstance(context, Mapping):
        return SupplementContext.model_validate(dict(context))
    return SupplementContext()
