"""Content record types.

A record is a plain mapping of field name to value, as decoded from a
flat-file entry or page.  Author-defined fields live beside a handful
of system fields the query engine relies on (see ``SystemField``).
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from typing import Any, TypeAlias

# Closed set of shapes a field value can take.
Scalar: TypeAlias = str | int | float | bool | None
FieldValue: TypeAlias = Scalar | list["FieldValue"] | dict[str, "FieldValue"]

# Records stay open mappings; values are FieldValue in practice but may
# also hold datetimes handed in by callers.
Record: TypeAlias = dict[str, Any]


class SystemField(StrEnum):
    """Fields maintained by the content store rather than by authors."""

    URL = "url"
    IS_PAGE = "_is_page"
    IS_ENTRY = "_is_entry"
    LOCAL_PATH = "_local_path"
    FOLDER = "_folder"
    ORDER_KEY = "_order_key"
    DATESTAMP = "datestamp"
    FILE = "_file"
    CONTENT_TYPE = "_content_type"
    COORDINATES = "coordinates"


def is_scalar(value: object) -> bool:
    """True for anything that is neither a sequence nor a mapping."""
    return not isinstance(value, (list, tuple, dict))


def is_hidden(record: Mapping[str, Any]) -> bool:
    """Whether the record lives under an underscore-prefixed path segment.

    ``/blog/_drafts/post.md`` is hidden; ``/blog/my_post.md`` is not.
    """
    local_path = record.get(SystemField.LOCAL_PATH) or ""
    return any(segment.startswith("_") for segment in str(local_path).split("/"))


def unique_by_url(records: object) -> list[Record]:
    """Drop records whose ``url`` was already seen; first occurrence wins.

    Anything that is not a list/tuple of records yields an empty list,
    and items that are not mappings are skipped.
    """
    if not isinstance(records, (list, tuple)):
        return []

    seen: set[Any] = set()
    unique: list[Record] = []
    for record in records:
        if not isinstance(record, Mapping):
            continue
        url = record.get(SystemField.URL)
        if url in seen:
            continue
        seen.add(url)
        unique.append(record)
    return unique
