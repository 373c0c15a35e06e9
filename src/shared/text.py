"""Small string helpers shared by filtering and supplementation."""

from __future__ import annotations

import re
from collections.abc import Sequence

# Order-key prefix on a URL segment: ``2013-01-02-`` (optionally with a
# ``-1230`` time) or ``3.``
ORDER_KEY_RE = re.compile(r"(?<=/)(?:\d{4}-\d{2}-\d{2}(?:-\d{4})?-|\d+\.)")

_ALL_FOLDERS = ("*", "/*")
_SLUG_STRIP_RE = re.compile(r"[^\w\s-]")
_SLUG_DASH_RE = re.compile(r"[\s_-]+")


def parse_folders(raw: object) -> list[str]:
    """Normalize a folder filter into an ordered list of patterns.

    Strings are split on ``|`` and ``,``.  Surrounding slashes are
    stripped except from the all-match tokens ``*`` and ``/*``.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        parts = re.split(r"[|,]", raw)
    elif isinstance(raw, (list, tuple)):
        parts = [str(p) for p in raw]
    else:
        parts = [str(raw)]

    folders: list[str] = []
    for part in parts:
        part = part.strip()
        if part not in _ALL_FOLDERS:
            part = part.strip("/")
        if part:
            folders.append(part)
    return folders


def make_sentence_list(items: Sequence[object], glue: str = "and", oxford_comma: bool = True) -> str:
    """Join items as a sentence: ``a, b, and c``.

    >>> make_sentence_list(["a", "b", "c"], "&", oxford_comma=False)
    'a, b & c'
    """
    words = [str(item) for item in items]
    if len(words) < 2:
        return "".join(words)
    if len(words) == 2:
        return f"{words[0]} {glue} {words[1]}"

    comma = "," if oxford_comma else ""
    return f"{', '.join(words[:-1])}{comma} {glue} {words[-1]}"


def strip_order_keys(uri: str) -> str:
    """Remove order-key prefixes from every segment of a URI."""
    return ORDER_KEY_RE.sub("", uri)


def slugify(text: str) -> str:
    """Lowercase, drop punctuation, and dash-join words."""
    text = _SLUG_STRIP_RE.sub("", text.lower()).strip()
    return _SLUG_DASH_RE.sub("-", text).strip("-")
