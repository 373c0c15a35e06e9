"""Query domain: filter, sort, paginate and supplement content records.

Public API re-exports for the query pipeline.
"""

from folio.query.compare import compare_values
from folio.query.conditions import (
    ComparisonType,
    Condition,
    ConditionEvaluator,
    ConditionKind,
    ConditionResult,
    ExistenceType,
    parse_conditions,
)
from folio.query.contentset import ContentSet
from folio.query.filters import FilterEngine, FilterSpec, ResolvedFilter
from folio.query.pagination import isolate_page, limit_records, page_offset
from folio.query.services import get_content, select_by_url
from folio.query.sorting import SORT_ALIASES, resolve_sort_field, sort_records
from folio.query.supplement import SupplementContext, Supplementer
from folio.query.taxonomy import TaxonomyService

__all__ = [
    # comparison
    "compare_values",
    # conditions
    "ComparisonType",
    "Condition",
    "ConditionEvaluator",
    "ConditionKind",
    "ConditionResult",
    "ExistenceType",
    "parse_conditions",
    # filtering
    "FilterEngine",
    "FilterSpec",
    "ResolvedFilter",
    # sorting
    "SORT_ALIASES",
    "resolve_sort_field",
    "sort_records",
    # pagination
    "isolate_page",
    "limit_records",
    "page_offset",
    # supplementation
    "SupplementContext",
    "Supplementer",
    "TaxonomyService",
    # orchestration
    "ContentSet",
    "get_content",
    "select_by_url",
]
