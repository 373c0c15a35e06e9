"""Content domain: record types, raw file access and rendering.

The query engine consumes these through narrow interfaces so any store
or renderer can be swapped in.
"""

from folio.content.models import (
    FieldValue,
    Record,
    Scalar,
    SystemField,
    is_hidden,
    is_scalar,
    unique_by_url,
)
from folio.content.render import ContentRenderer, TemplateRenderer
from folio.content.store import (
    ContentStore,
    FileContentStore,
    load_records,
    split_front_matter,
)

__all__ = [
    "ContentRenderer",
    "ContentStore",
    "FieldValue",
    "FileContentStore",
    "Record",
    "Scalar",
    "SystemField",
    "TemplateRenderer",
    "is_hidden",
    "is_scalar",
    "load_records",
    "split_front_matter",
    "unique_by_url",
]
