"""Warble exception hierarchy.

Shared across Route, Router, and discovery so every module raises and
catches the same types. "No route matched" is never an exception:
``Router.handle`` and ``Router.is_valid`` return ``None``/``False``.
"""

from collections.abc import Sequence
from dataclasses import dataclass


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class RoutingError(WarbleError):
    """Base for errors raised while defining or generating routes."""


class RouteDefinitionError(RoutingError):
    """Raised when a route template cannot be compiled.

    Unknown type alias (``{id::nope}``) or the same placeholder declared
    twice in one template (``/{id}/{id}``). The route is not created.
    """


@dataclass(frozen=True, slots=True)
class MissingAttributes(RoutingError):
    """Generation left one or more required placeholders unresolved."""

    names: tuple[str, ...]
    route: str | None = None

    def __str__(self) -> str:
        noun = "attribute" if len(self.names) == 1 else "attributes"
        names = ", ".join(f'"{name}"' for name in self.names)
        if self.route is None:
            return f"Missing {noun} {names} to generate route"
        return f'Missing {noun} {names} to generate route "{self.route}"'


@dataclass(frozen=True, slots=True)
class RouteNotFound(RoutingError):  # noqa: N818
    """No route is registered under the requested name."""

    name: str

    def __str__(self) -> str:
        return f'Route "{self.name}" does not exist'


@dataclass(frozen=True, slots=True)
class AmbiguousRoute(RoutingError):  # noqa: N818
    """Several same-named routes generated equally specific paths.

    ``candidates`` holds the competing generated paths, in registration
    order, for developer visibility.
    """

    name: str
    candidates: Sequence[str] = ()

    def __str__(self) -> str:
        msg = f'Multiple possible routes named "{self.name}" with given parameters'
        if self.candidates:
            msg += f" ({', '.join(self.candidates)})"
        return msg
