"""Current-request context consumed by contextual URL supplementation."""

from __future__ import annotations


class RequestContext:
    """Holds the resource URI of the request being rendered."""

    def __init__(self, resource_uri: str = "/") -> None:
        self._resource_uri = resource_uri

    def current_resource_uri(self) -> str:
        return self._resource_uri
