"""Record filtering: type, visibility, folder, date range, conditions, location.

A ``FilterSpec`` is what callers hand in: every field optional, unset
meaning inactive.  ``FilterEngine.resolve`` turns it into a
``ResolvedFilter`` (dates resolved to epoch seconds, folders and
conditions parsed), and ``FilterEngine.apply`` keeps the records that
pass every active predicate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, date, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from folio.config import FolioConfig
from folio.content.models import Record, SystemField, is_hidden
from folio.query.conditions import Condition, ConditionEvaluator, parse_conditions
from folio.query.taxonomy import TaxonomyService
from folio.shared.dates import resolve_date
from folio.shared.text import parse_folders

logger = logging.getLogger(__name__)

KEEP_ALL = "all"
KEEP_PAGES = "pages"
KEEP_ENTRIES = "entries"
_ALL_FOLDERS = ("*", "/*")
_TRUE_WORDS = frozenset({"true", "yes", "on", "1"})
_FALSE_WORDS = frozenset({"false", "no", "off", "0", ""})

DateResolver = Callable[..., int | None]


class FilterSpec(BaseModel):
    """Caller-facing filter options; ``None`` leaves a predicate off.

    Input is read leniently: flags accept boolean words and otherwise
    fall back to truthiness, folder entries may be numbers, and a value
    that still cannot be read is dropped by ``_coerce_spec``.
    """

    show_all: bool | None = None
    since: str | int | float | datetime | date | None = None
    until: str | int | float | datetime | date | None = None
    show_past: bool | None = None
    show_future: bool | None = None
    type: str | None = None
    folders: str | list[str] | None = None
    conditions: str | dict[str, Any] | None = None
    located: bool | None = None

    @field_validator("show_all", "show_past", "show_future", "located", mode="before")
    @classmethod
    def _loose_flag(cls, value: object) -> bool | None:
        if value is None or isinstance(value, bool):
            return value
        if isinstance(value, str):
            word = value.strip().lower()
            if word in _TRUE_WORDS:
                return True
            if word in _FALSE_WORDS:
                return False
        return bool(value)

    @field_validator("folders", mode="before")
    @classmethod
    def _folder_text(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return [str(folder) for folder in value if folder is not None]
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _lower_type(cls, value: object) -> str | None:
        return str(value).lower() if value is not None else None


class ResolvedFilter(BaseModel):
    """Normalized predicates ready to run against records."""

    since: int | None = None
    until: int | None = None
    remove_hidden: bool = False
    keep_type: str = KEEP_ALL
    folders: list[str] = Field(default_factory=list)
    conditions: dict[str, Condition] = Field(default_factory=dict)
    located: bool = False


class FilterEngine:
    """Applies a filter specification to a list of records."""

    def __init__(
        self,
        config: FolioConfig | None = None,
        *,
        taxonomy: TaxonomyService | None = None,
        date_resolver: DateResolver = resolve_date,
        now: datetime | None = None,
    ) -> None:
        self._config = config or FolioConfig()
        self._taxonomy = taxonomy or TaxonomyService(self._config.taxonomy)
        self._resolve_date = date_resolver
        self._now = now
        self._evaluator = ConditionEvaluator(
            self._taxonomy,
            case_sensitive_taxonomies=self._config.taxonomy_case_sensitive,
        )

    def resolve(self, spec: FilterSpec | Mapping[str, Any] | None) -> ResolvedFilter:
        """Normalize ``spec`` into concrete predicates."""
        spec = _coerce_spec(spec)
        now = self._now or datetime.now(UTC)
        now_epoch = int(now.timestamp())

        since = self._resolve_bound("since", spec.since, now)
        until = self._resolve_bound("until", spec.until, now)

        if spec.show_past is False and (not since or since < now_epoch):
            since = now_epoch
        if spec.show_future is False and (not until or until > now_epoch):
            until = now_epoch

        keep_type = spec.type if spec.type in (KEEP_PAGES, KEEP_ENTRIES) else KEEP_ALL

        return ResolvedFilter(
            since=since,
            until=until,
            remove_hidden=spec.show_all is False,
            keep_type=keep_type,
            folders=parse_folders(spec.folders) if spec.folders else [],
            conditions=parse_conditions(spec.conditions) if spec.conditions else {},
            located=bool(spec.located),
        )

    def apply(
        self,
        records: Sequence[Record],
        spec: FilterSpec | Mapping[str, Any] | ResolvedFilter | None,
    ) -> list[Record]:
        """Return the records that pass every active predicate, in order."""
        if not records:
            return list(records)

        resolved = spec if isinstance(spec, ResolvedFilter) else self.resolve(spec)
        kept = [record for record in records if self.keeps(record, resolved)]
        logger.debug("Filter kept %d of %d records", len(kept), len(records))
        return kept

    def keeps(self, record: Record, resolved: ResolvedFilter) -> bool:
        """Check one record; the first failing predicate decides."""
        if resolved.keep_type == KEEP_PAGES and not record.get(SystemField.IS_PAGE):
            return False
        if resolved.keep_type == KEEP_ENTRIES and not record.get(SystemField.IS_ENTRY):
            return False

        if resolved.remove_hidden and is_hidden(record):
            return False

        if resolved.folders and not _folder_matches(record.get(SystemField.FOLDER), resolved.folders):
            return False

        datestamp = record.get(SystemField.DATESTAMP)
        if resolved.since and datestamp and datestamp < resolved.since:
            return False
        if resolved.until and datestamp and datestamp > resolved.until:
            return False

        if resolved.conditions and not self._evaluator.fits(record, resolved.conditions):
            return False

        if resolved.located and not record.get(SystemField.COORDINATES):
            return False

        return True

    def _resolve_bound(self, name: str, token: object, now: datetime) -> int | None:
        if not token:
            return None
        resolved = self._resolve_date(token, now=now)
        if resolved is None:
            logger.warning("Ignoring unresolvable %s date %r", name, token)
        return resolved


def _coerce_spec(spec: FilterSpec | Mapping[str, Any] | None) -> FilterSpec:
    if isinstance(spec, FilterSpec):
        return spec
    if not isinstance(spec, Mapping):
        return FilterSpec()

    data = {str(key): value for key, value in spec.items() if key in FilterSpec.model_fields}
    try:
        return FilterSpec.model_validate(data)
    except ValidationError as exc:
        bad_keys = {str(error["loc"][0]) for error in exc.errors() if error["loc"]}
        logger.warning("Ignoring unreadable filter options: %s", ", ".join(sorted(bad_keys)))
        return FilterSpec.model_validate({k: v for k, v in data.items() if k not in bad_keys})


def _folder_matches(folder: object, patterns: Sequence[str]) -> bool:
    folder_text = "" if folder is None else str(folder).strip("/")
    for pattern in patterns:
        if pattern in _ALL_FOLDERS:
            return True
        if pattern.endswith("*"):
            if folder_text.startswith(pattern[:-1]):
                return True
        elif pattern == folder_text:
            return True
    return False
