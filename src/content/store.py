"""Flat-file access for content bodies and record collections.

The query engine itself never touches the disk; ``ContentSet.prepare``
asks a ``ContentStore`` for a record's raw file when full content
parsing is requested.  ``load_records`` reads an already-decoded
record collection from JSON for the CLI.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from folio.content.models import Record

logger = logging.getLogger(__name__)

FRONT_MATTER_FENCE = "---"


class ContentStore(ABC):
    """Source of raw content files referenced by a record's ``_file``."""

    @abstractmethod
    def read_raw_body(self, file_ref: str) -> str:
        """Return the full raw text (front matter included) of a content file."""


class FileContentStore(ContentStore):
    """Reads content files from disk relative to a base directory.

    Missing or unreadable files raise ``OSError`` straight to the caller.
    """

    def __init__(self, base_path: Path | str = ".") -> None:
        self._base_path = Path(base_path)

    def read_raw_body(self, file_ref: str) -> str:
        path = Path(file_ref)
        if not path.is_absolute():
            path = self._base_path / path
        logger.debug("Reading content file %s", path)
        return path.read_text(encoding="utf-8")


def split_front_matter(raw: str) -> tuple[str, str]:
    """Split a content file into ``(front_matter, body)``.

    The leading ``---`` fence is dropped and the text is split at the
    next line starting with ``---``; the body is trimmed.  Text without
    a leading fence is all body.
    """
    if not raw.startswith(FRONT_MATTER_FENCE):
        return "", raw.strip()

    rest = raw[len(FRONT_MATTER_FENCE):]
    divide = rest.find("\n" + FRONT_MATTER_FENCE)
    if divide == -1:
        return rest.strip(), ""

    front = rest[:divide]
    body = rest[divide + len(FRONT_MATTER_FENCE) + 1:]
    return front.strip(), body.strip()


def load_records(path: Path) -> list[Record]:
    """Load a JSON array of record objects.

    Raises:
        ValueError: If the file is not valid JSON or not a list of objects.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list) or not all(isinstance(item, dict) for item in raw):
        raise ValueError(f"{path} must contain a JSON array of objects")

    logger.debug("Loaded %d records from %s", len(raw), path)
    return raw
