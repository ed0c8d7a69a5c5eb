"""Shared protocols and type aliases used across warble modules."""

from collections.abc import Mapping
from typing import Any, Protocol, Self, TypeAlias, runtime_checkable

# Attribute default values accepted by routes
Scalar: TypeAlias = str | int | float | bool

# Generation input: a flat mapping, possibly with nested lists/dicts
# destined for the query string
Parameters: TypeAlias = Mapping[str, Any]


class RoutableRequest(Protocol):
    """What the routing engine reads from (and writes to) a request.

    ``path`` is the decoded path without query string. ``host`` may be
    empty when unknown.
    """

    @property
    def method(self) -> str: ...

    @property
    def path(self) -> str: ...

    @property
    def host(self) -> str: ...

    def with_attributes(self, attributes: Mapping[str, Any]) -> Self: ...


@runtime_checkable
class RouteAttributes(Protocol):
    """An object able to export the attributes used to build its URL.

    Typically a model: ``router.generate("user", user)`` where ``user``
    returns ``{"id": user.id, "slug": user.slug}``.
    """

    def route_attributes(self) -> Mapping[str, Any]: ...
