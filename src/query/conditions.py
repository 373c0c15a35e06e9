"""Condition language: parsing and per-record evaluation.

A condition string such as ``"featured, author:jack, tags:red|blue,
status:not draft, !hidden"`` parses to one instruction per field::

    {"featured": Condition(kind="existence", type="has"),
     "author":   Condition(kind="comparison", type="equal", value="jack"),
     "tags":     Condition(kind="comparison", type="in", value=["red", "blue"]),
     "status":   Condition(kind="comparison", type="not equal", value="draft"),
     "hidden":   Condition(kind="existence", type="lacks")}

Evaluation never raises.  Each instruction yields a ``ConditionResult``
and a record fits only when every result passed; unknown kinds or
types fail so the record is left out.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from folio.query.taxonomy import TaxonomyService

logger = logging.getLogger(__name__)

# Split on commas that sit outside double quotes.
_SEGMENT_SPLIT_RE = re.compile(r',(?=(?:[^"]*"[^"]*")*[^"]*$)')

_HAS_WORDS = frozenset({"is_set", "isset"})
_LACKS_WORDS = frozenset({"is_not_set", "not_set", "isnt_set"})
_BOOLEAN_WORDS = {"true": True, "yes": True, "false": False, "no": False}


class ConditionKind(StrEnum):
    EXISTENCE = "existence"
    COMPARISON = "comparison"


class ExistenceType(StrEnum):
    HAS = "has"
    LACKS = "lacks"


class ComparisonType(StrEnum):
    EQUAL = "equal"
    NOT_EQUAL = "not equal"
    IN = "in"


class Condition(BaseModel):
    """One instruction applied to one field.

    ``kind`` and ``type`` are plain strings so that unrecognized input
    survives parsing and fails at evaluation time.
    """

    kind: str
    type: str
    value: Any = None


@dataclass(frozen=True)
class ConditionResult:
    """Outcome of evaluating one instruction against one record."""

    passed: bool
    reason: str = ""


SATISFIED = ConditionResult(passed=True)


def _failed(reason: str) -> ConditionResult:
    return ConditionResult(passed=False, reason=reason)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_conditions(raw: object) -> dict[str, Condition]:
    """Parse a condition string or structured mapping into instructions.

    Structured input maps field names to ``{kind, type, value}``
    mappings (or ``Condition`` objects).  A malformed structured entry
    is kept as an instruction of unknown kind, so it fails every record.
    """
    if not raw:
        return {}
    if isinstance(raw, Mapping):
        return {str(field): _coerce_condition(spec) for field, spec in raw.items()}
    if not isinstance(raw, str):
        logger.warning("Ignoring conditions of unsupported type %s", type(raw).__name__)
        return {}

    conditions: dict[str, Condition] = {}
    for segment in _SEGMENT_SPLIT_RE.split(raw):
        segment = segment.strip()
        if not segment:
            continue
        parsed = _parse_segment(segment)
        if parsed is None:
            logger.warning("Skipping malformed condition %r", segment)
            continue
        field, condition = parsed
        conditions[field] = condition
    return conditions


def _coerce_condition(spec: object) -> Condition:
    if isinstance(spec, Condition):
        return spec
    if isinstance(spec, Mapping):
        return Condition(
            kind=str(spec.get("kind", "")),
            type=str(spec.get("type", "")),
            value=spec.get("value"),
        )
    return Condition(kind="", type="", value=spec)


def _parse_segment(segment: str) -> tuple[str, Condition] | None:
    field, sep, value = segment.partition(":")
    field = field.strip()

    if not sep:
        if field.startswith("!"):
            field = field[1:].strip()
            condition = Condition(kind=ConditionKind.EXISTENCE, type=ExistenceType.LACKS)
        else:
            condition = Condition(kind=ConditionKind.EXISTENCE, type=ExistenceType.HAS)
        return (field, condition) if field else None

    if not field:
        return None

    value = value.strip()
    lowered = value.lower()
    if lowered in _HAS_WORDS:
        return field, Condition(kind=ConditionKind.EXISTENCE, type=ExistenceType.HAS)
    if lowered in _LACKS_WORDS:
        return field, Condition(kind=ConditionKind.EXISTENCE, type=ExistenceType.LACKS)

    if lowered.startswith("not "):
        return field, Condition(
            kind=ConditionKind.COMPARISON,
            type=ComparisonType.NOT_EQUAL,
            value=_unquote(value[4:]),
        )
    if value.startswith("!"):
        return field, Condition(
            kind=ConditionKind.COMPARISON,
            type=ComparisonType.NOT_EQUAL,
            value=_unquote(value[1:]),
        )
    if "|" in value:
        return field, Condition(
            kind=ConditionKind.COMPARISON,
            type=ComparisonType.IN,
            value=[_unquote(option) for option in value.split("|")],
        )
    return field, Condition(
        kind=ConditionKind.COMPARISON,
        type=ComparisonType.EQUAL,
        value=_unquote(value),
    )


def _unquote(text: str) -> str:
    text = text.strip()
    if len(text) >= 2 and text[0] == text[-1] == '"':
        return text[1:-1]
    return text


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


class ConditionEvaluator:
    """Checks records against parsed conditions.

    Comparison values are lower-cased on both sides unless the field is
    a taxonomy and case-sensitive taxonomies are configured.
    """

    def __init__(
        self,
        taxonomy: TaxonomyService | None = None,
        *,
        case_sensitive_taxonomies: bool = False,
    ) -> None:
        self._taxonomy = taxonomy or TaxonomyService()
        self._case_sensitive_taxonomies = case_sensitive_taxonomies

    def evaluate_all(
        self,
        record: Mapping[str, Any],
        conditions: Mapping[str, Condition],
    ) -> dict[str, ConditionResult]:
        """Evaluate every instruction independently."""
        return {field: self.evaluate(record, field, condition) for field, condition in conditions.items()}

    def fits(self, record: Mapping[str, Any], conditions: Mapping[str, Condition]) -> bool:
        return all(result.passed for result in self.evaluate_all(record, conditions).values())

    def evaluate(self, record: Mapping[str, Any], field: str, condition: Condition) -> ConditionResult:
        if condition.kind == ConditionKind.EXISTENCE:
            return self._check_existence(record, field, condition)
        if condition.kind == ConditionKind.COMPARISON:
            return self._check_comparison(record, field, condition)
        return _failed(f"unknown condition kind {condition.kind!r}")

    def _check_existence(
        self, record: Mapping[str, Any], field: str, condition: Condition
    ) -> ConditionResult:
        present = bool(record.get(field))
        if condition.type == ExistenceType.HAS:
            return SATISFIED if present else _failed(f"{field} is not set")
        if condition.type == ExistenceType.LACKS:
            return _failed(f"{field} is set") if present else SATISFIED
        return _failed(f"unknown existence type {condition.type!r}")

    def _check_comparison(
        self, record: Mapping[str, Any], field: str, condition: Condition
    ) -> ConditionResult:
        raw = record.get(field)
        absent = raw is None
        case_sensitive = self._case_sensitive_taxonomies and self._taxonomy.is_taxonomy(field)

        actual = None if absent else _normalize(raw, case_sensitive)
        target = _normalize(condition.value, case_sensitive)

        if condition.type == ComparisonType.EQUAL:
            if absent:
                return _failed(f"{field} is not set")
            if isinstance(actual, list):
                return SATISFIED if target in actual else _failed(f"{field} does not contain {target!r}")
            return SATISFIED if actual == target else _failed(f"{field} is not {target!r}")

        if condition.type == ComparisonType.NOT_EQUAL:
            if absent:
                return SATISFIED
            if isinstance(actual, list):
                return _failed(f"{field} contains {target!r}") if target in actual else SATISFIED
            return _failed(f"{field} is {target!r}") if actual == target else SATISFIED

        if condition.type == ComparisonType.IN:
            if absent:
                return _failed(f"{field} is not set")
            options = target if isinstance(target, list) else [target]
            if isinstance(actual, list):
                found = any(item in options for item in actual)
            else:
                found = actual in options
            return SATISFIED if found else _failed(f"{field} not in {options!r}")

        return _failed(f"unknown comparison type {condition.type!r}")


def _normalize(value: object, case_sensitive: bool) -> Any:
    """Bring a field or condition value into comparable form."""
    if isinstance(value, (list, tuple)):
        return [_normalize_scalar(item, case_sensitive) for item in value]
    return _normalize_scalar(value, case_sensitive)


def _normalize_scalar(value: object, case_sensitive: bool) -> Any:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        text = str(int(value))
    else:
        text = str(value)
    if not case_sensitive:
        text = text.lower()
    boolean = _BOOLEAN_WORDS.get(text.lower())
    return text if boolean is None else boolean
