"""Immutable routing request.

Only what the router needs: method, host, decoded path, and the
attributes attached by a successful match. Attaching attributes returns
a new value; the original is never modified.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any
from urllib.parse import unquote, urlsplit


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request as seen by the router.

    ``path`` is percent-decoded and carries no query string.
    ``host`` is the bare host name (no port), or empty when unknown.
    """

    method: str = "GET"
    path: str = "/"
    host: str = ""
    attributes: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def get_attribute(self, name: str, default: Any = None) -> Any:
        """Return the attribute *name*, or *default* if unset."""
        return self.attributes.get(name, default)

    def with_attribute(self, name: str, value: Any) -> Request:
        """Return a copy with *name* set to *value*."""
        return self.with_attributes({name: value})

    def with_attributes(self, attributes: Mapping[str, Any]) -> Request:
        """Return a copy with *attributes* merged over the existing ones."""
        return replace(self, attributes={**self.attributes, **attributes})

    # -- Factories --

    @classmethod
    def from_url(cls, url: str, method: str = "GET") -> Request:
        """Create a Request from an absolute URL or a bare path.

        The query string and fragment are dropped; the path is
        percent-decoded.
        """
        parts = urlsplit(url)
        return cls(
            method=method,
            path=unquote(parts.path) or "/",
            host=parts.hostname or "",
        )

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope.

        The host comes from the ``Host`` header, falling back to the
        ``server`` entry of the scope.
        """
        host = ""
        for key, value in scope.get("headers", ()):
            if key.lower() == b"host":
                host = urlsplit("//" + value.decode("latin-1")).hostname or ""
                break
        else:
            server = scope.get("server")
            if server:
                host = server[0]
        return cls(method=scope["method"], path=scope["path"], host=host)
