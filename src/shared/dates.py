"""Date token resolution for ``since``/``until`` filters.

Turns user-facing date expressions into epoch seconds: raw numbers,
``datetime``/``date`` objects, keywords like ``today``, relative
offsets such as ``-2 weeks`` or ``3 days ago``, and anything
``dateutil`` can parse.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, date, datetime, time

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

logger = logging.getLogger(__name__)

_RELATIVE_RE = re.compile(
    r"^(?P<sign>[+-])?\s*(?P<amount>\d+)\s*(?P<unit>second|minute|hour|day|week|month|year)s?"
    r"(?P<ago>\s+ago)?$"
)
_NEXT_LAST_RE = re.compile(r"^(?P<which>next|last)\s+(?P<unit>second|minute|hour|day|week|month|year)$")

_UNIT_ARGS = {
    "second": "seconds",
    "minute": "minutes",
    "hour": "hours",
    "day": "days",
    "week": "weeks",
    "month": "months",
    "year": "years",
}


def resolve_date(token: object, now: datetime | None = None) -> int | None:
    """Resolve a date expression to epoch seconds.

    Args:
        token: Expression to resolve.
        now: Reference time for keywords and relative offsets.
            Defaults to the current UTC time.

    Returns:
        Epoch seconds, or None when the token cannot be understood.
    """
    now = now or datetime.now(UTC)

    if token is None or isinstance(token, bool):
        return None
    if isinstance(token, (int, float)):
        return int(token)
    if isinstance(token, datetime):
        return _epoch(token)
    if isinstance(token, date):
        return _epoch(datetime.combine(token, time.min))

    text = str(token).strip().lower()
    if not text:
        return None
    if re.fullmatch(r"-?\d+", text):
        return int(text)

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    keywords = {
        "now": now,
        "today": midnight,
        "yesterday": midnight - relativedelta(days=1),
        "tomorrow": midnight + relativedelta(days=1),
    }
    if text in keywords:
        return _epoch(keywords[text])

    match = _RELATIVE_RE.match(text)
    if match:
        amount = int(match.group("amount"))
        if match.group("sign") == "-" or match.group("ago"):
            amount = -amount
        return _epoch(now + relativedelta(**{_UNIT_ARGS[match.group("unit")]: amount}))

    match = _NEXT_LAST_RE.match(text)
    if match:
        amount = 1 if match.group("which") == "next" else -1
        return _epoch(now + relativedelta(**{_UNIT_ARGS[match.group("unit")]: amount}))

    try:
        parsed = date_parser.parse(text, default=midnight.replace(tzinfo=None))
    except (ValueError, OverflowError):
        logger.warning("Could not resolve date expression %r", token)
        return None
    return _epoch(parsed)


def _epoch(value: datetime) -> int:
    """Epoch seconds, treating naive datetimes as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return int(value.timestamp())
