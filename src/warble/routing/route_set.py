"""Route tree traversal shared by route groups and the router.

Children are kept sorted by descending priority. Equal priorities keep
registration order, so the first route registered wins a tie.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, Self

if TYPE_CHECKING:
    from warble._internal.types import RoutableRequest
    from warble.routing.route import Route


class RouteSet:
    """An ordered tree of routes.

    Used directly as a standalone container (route discovery returns
    one), and as the base of ``Route`` (groups) and ``Router``.
    """

    __slots__ = ("_routes",)

    def __init__(self) -> None:
        self._routes: list[Route] = []

    @property
    def routes(self) -> tuple[Route, ...]:
        """Direct children, in priority order. Groups are not expanded."""
        return tuple(self._routes)

    def count(self) -> int:
        """Number of leaf routes in the tree."""
        return sum(1 for _ in self.get_routes())

    def get_routes(self) -> Iterator[Route]:
        """Yield every leaf route, depth-first, groups expanded in place.

        Each call starts a fresh traversal.
        """
        for route in self._routes:
            if route.is_group():
                yield from route.get_routes()
                continue
            yield route

    def get_route(self, name: str) -> Route | None:
        """Return the first leaf route named *name*, or ``None``."""
        for route in self.get_routes():
            if route.name == name:
                return route
        return None

    def search_route(
        self,
        request: RoutableRequest,
        attributes: dict[str, Any] | None = None,
    ) -> Route | None:
        """Return the first leaf route accepting *request*, or ``None``.

        On success, *attributes* (when given) receives the path
        attributes captured by the matching route.
        """
        for route in self.get_routes():
            if route.test(request, attributes):
                return route
        return None

    def add_route(self, *routes: Route) -> Self:
        """Append *routes* and re-sort children by priority."""
        for route in routes:
            self._routes.append(route)
            self._adopt(route)
        # Stable: equal priorities keep registration order
        self._routes.sort(key=lambda route: route.priority, reverse=True)
        return self

    def merge(self, route_set: RouteSet) -> Self:
        """Add the direct children of *route_set* to this set."""
        return self.add_route(*route_set.routes)

    def _adopt(self, route: Route) -> None:
        """Hook called for each added route."""
