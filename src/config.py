"""Unified configuration loaded from .folio.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".folio.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]

_TRUTHY = ("true", "1", "yes")


class PaginationConfig(BaseModel):
    """[pagination] section."""

    fix_out_of_range: bool = False


class TaxonomyConfig(BaseModel):
    """[taxonomy] section."""

    fields: list[str] = Field(default_factory=lambda: ["categories", "tags"])
    case_sensitive: bool = False
    slugify: bool = True


class SupplementConfig(BaseModel):
    """[supplement] section: defaults for per-call supplement context."""

    list_helpers: bool = True
    context_urls: bool = True


class ContentConfig(BaseModel):
    """[content] section."""

    base_path: str = "."
    default_format: str = "markdown"


class FolioConfig(BaseModel):
    """Top-level configuration snapshot handed to every query stage.

    ``defaults`` holds the process-wide fields that supplementation
    merges underneath every record.
    """

    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    taxonomy: TaxonomyConfig = Field(default_factory=TaxonomyConfig)
    supplement: SupplementConfig = Field(default_factory=SupplementConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    defaults: dict[str, Any] = Field(default_factory=dict)

    def get_all(self) -> dict[str, Any]:
        """Return a copy of the global default fields."""
        return dict(self.defaults)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up a single global default field."""
        return self.defaults.get(key, default)

    @property
    def taxonomy_case_sensitive(self) -> bool:
        return self.taxonomy.case_sensitive

    @property
    def fix_out_of_range_pagination(self) -> bool:
        return self.pagination.fix_out_of_range


def load_config(path: str | Path | None = None) -> FolioConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .folio.toml in CWD
    3. ~/.config/folio/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged FolioConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        global_config = Path.home() / ".config" / "folio" / "config.toml"
        if not data and global_config.exists():
            data = _load_toml(global_config)
            logger.info("Loaded config from %s", global_config)

    config = FolioConfig.model_validate(data) if data else FolioConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: FolioConfig, **cli_kwargs: object) -> FolioConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).

    Args:
        config: Base config.
        **cli_kwargs: CLI flag values, e.g. ``fix_pagination`` or
            ``case_sensitive_taxonomies``.

    Returns:
        Updated config with CLI overrides applied.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "fix_pagination": ("pagination", "fix_out_of_range"),
        "case_sensitive_taxonomies": ("taxonomy", "case_sensitive"),
        "taxonomies": ("taxonomy", "fields"),
        "list_helpers": ("supplement", "list_helpers"),
        "context_urls": ("supplement", "context_urls"),
        "content_base_path": ("content", "base_path"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return FolioConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: FolioConfig) -> FolioConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    fix_raw = os.environ.get("FOLIO_FIX_OUT_OF_RANGE_PAGINATION")
    if fix_raw is not None:
        data["pagination"]["fix_out_of_range"] = fix_raw.lower() in _TRUTHY

    case_raw = os.environ.get("FOLIO_TAXONOMY_CASE_SENSITIVE")
    if case_raw is not None:
        data["taxonomy"]["case_sensitive"] = case_raw.lower() in _TRUTHY

    fields_raw = os.environ.get("FOLIO_TAXONOMIES")
    if fields_raw is not None:
        data["taxonomy"]["fields"] = [f.strip() for f in fields_raw.split(",") if f.strip()]

    base_path = os.environ.get("FOLIO_CONTENT_BASE_PATH")
    if base_path is not None:
        data["content"]["base_path"] = base_path

    return FolioConfig.model_validate(data)
