"""Route attributes and the placeholder type registry.

An attribute is a named placeholder of a route path. Its default value
and validation regex resolve through the parent route chain when unset
locally, so a group can constrain ``{id}`` once for all its children.
"""

from __future__ import annotations

import warnings
from typing import TYPE_CHECKING, Any

from warble._internal.types import Scalar
from warble.errors import RouteDefinitionError

if TYPE_CHECKING:
    from warble.routing.route import Route

# Regex fragment for each ``{name::type}`` alias
TYPES: dict[str, str] = {
    "int": r"\d+",
    "float": r"\d+(\.\d+)",
    "uuid4": r"[0-9A-Fa-f]{8}\-[0-9A-Fa-f]{4}\-[0-9A-Fa-f]{4}\-[0-9A-Fa-f]{4}\-[0-9A-Fa-f]{12}",
    "slug": r"[a-z0-9]+(?:-[a-z0-9]+)*",
    "md5": r"[0-9a-fA-F]{32}",
    "sha1": r"[0-9a-fA-F]{40}",
    "domain": r"([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,6}",
}

# Deprecated alias -> replacement
DEPRECATED_TYPES: dict[str, str] = {
    "uuid": "uuid4",
}


def resolve_type(alias: str) -> str:
    """Return the regex fragment registered for *alias*.

    Deprecated aliases still resolve, with a ``DeprecationWarning``.
    Raises ``RouteDefinitionError`` if *alias* is unknown.
    """
    if alias in DEPRECATED_TYPES:
        replacement = DEPRECATED_TYPES[alias]
        warnings.warn(
            f'Route type "{alias}" is deprecated, use "{replacement}" instead',
            DeprecationWarning,
            stacklevel=2,
        )
        alias = replacement

    try:
        return TYPES[alias]
    except KeyError:
        msg = f'Unknown type "{alias}"'
        raise RouteDefinitionError(msg) from None


class Attribute:
    """A named, constrained, defaultable path placeholder.

    ``route`` is a non-owning back-reference used only to reach the
    parent chain; it is not part of equality nor of the serialized form.
    """

    __slots__ = ("_default", "_regex", "name", "route")

    def __init__(
        self,
        name: str,
        default: Scalar | None = None,
        regex: str | None = None,
        route: Route | None = None,
    ) -> None:
        self.name = name
        self._default = default
        self._regex = regex
        self.route = route

    def __repr__(self) -> str:
        return f"Attribute({self.name!r}, default={self._default!r}, regex={self._regex!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Attribute):
            return NotImplemented
        return (self.name, self._default, self._regex) == (
            other.name,
            other._default,
            other._regex,
        )

    __hash__ = None  # type: ignore[assignment]

    def _inherited(self) -> Attribute | None:
        if self.route is None or self.route.parent is None:
            return None
        return self.route.parent.get_attribute(self.name)

    # -- Default --

    @property
    def default(self) -> Scalar | None:
        """Local default, else the nearest ancestor's, else ``None``."""
        if self._default is not None:
            return self._default
        inherited = self._inherited()
        return inherited.default if inherited is not None else None

    def set_default(self, default: Scalar | None) -> None:
        self._default = default

    def has_default(self) -> bool:
        return self.default is not None

    # -- Regex --

    @property
    def regex(self) -> str | None:
        """Local regex, else the nearest ancestor's, else ``None``."""
        if self._regex is not None:
            return self._regex
        inherited = self._inherited()
        return inherited.regex if inherited is not None else None

    def set_regex(self, regex: str | None) -> None:
        self._regex = regex

    def has_regex(self) -> bool:
        return self.regex is not None

    # -- Serialization --

    def set_route(self, route: Route | None) -> None:
        """Restore the back-reference after deserialization."""
        self.route = route

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "default": self._default, "regex": self._regex}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Attribute:
        return cls(data["name"], data.get("default"), data.get("regex"))

    def __getstate__(self) -> dict[str, Any]:
        return self.to_dict()

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.name = state["name"]
        self._default = state["default"]
        self._regex = state["regex"]
        self.route = None
