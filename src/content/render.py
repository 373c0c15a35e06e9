"""Content rendering: Jinja2 templates over record fields, then Markdown."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import markdown
from jinja2 import BaseLoader, Environment

_MARKDOWN_FORMATS = frozenset({"markdown", "md"})


class ContentRenderer(ABC):
    """Renders a template or content body against a record."""

    @abstractmethod
    def render(self, template: str, context: Mapping[str, Any], fmt: str | None = None) -> str:
        """Render ``template`` with ``context`` and convert it to output ``fmt``."""


class TemplateRenderer(ContentRenderer):
    """Jinja2 variable/tag substitution followed by Markdown conversion.

    ``fmt`` of ``markdown``/``md`` (the default) runs the result through
    the Markdown converter; any other format (``html``, ``text``) is
    returned as rendered.
    """

    def __init__(self, default_format: str = "markdown") -> None:
        self._env = Environment(loader=BaseLoader(), autoescape=False)
        self._default_format = default_format

    def render(self, template: str, context: Mapping[str, Any], fmt: str | None = None) -> str:
        rendered = self._env.from_string(template).render(dict(context))
        output_format = (fmt or self._default_format).lower()
        if output_format in _MARKDOWN_FORMATS:
            return markdown.markdown(rendered)
        return rendered
