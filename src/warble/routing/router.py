"""Router: request matching and URL generation over a route tree.

Routes are registered with ``add_route`` (groups included), then the
router answers two questions: which route accepts this request, and
what URL does this route name produce for these attributes.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, TypeVar

from warble._internal.types import Parameters, RouteAttributes
from warble.config import RouterConfig
from warble.errors import AmbiguousRoute, RouteNotFound, RoutingError
from warble.http.request import Request
from warble.routing.route import Route
from warble.routing.route_set import RouteSet

if TYPE_CHECKING:
    from warble._internal.types import RoutableRequest

R = TypeVar("R", bound="RoutableRequest")

ParameterSource = Parameters | RouteAttributes
GenerateParameters = ParameterSource | Iterable[ParameterSource]


def merge_parameters(parameters: GenerateParameters | None) -> dict[str, Any]:
    """Flatten generation parameters into a single dict.

    Accepts a mapping, an object exposing ``route_attributes()``, or a
    sequence mixing both. Later entries override earlier ones.
    """
    if parameters is None:
        return {}
    if isinstance(parameters, RouteAttributes):
        return dict(parameters.route_attributes())
    if isinstance(parameters, Mapping):
        return dict(parameters)

    merged: dict[str, Any] = {}
    for entry in parameters:
        if isinstance(entry, RouteAttributes):
            merged.update(entry.route_attributes())
        elif isinstance(entry, Mapping):
            merged.update(entry)
        else:
            msg = f"Cannot use {type(entry).__name__} as route parameters"
            raise TypeError(msg)
    return merged


class Router(RouteSet):
    """Entry point for matching requests and generating URLs.

    Usage::

        router = Router()
        router.add_route(Route("/users/{id::int}", name="user"))

        route, request = router.handle(Request.from_url("/users/42"))
        request.attributes                  # {"id": "42"}
        router.generate("user", {"id": 7})  # "/users/7"
    """

    __slots__ = ("_logger", "config")

    def __init__(self, config: RouterConfig | None = None) -> None:
        super().__init__()
        self.config = config or RouterConfig()
        self._logger = logging.getLogger(self.config.logger_name)

    def __repr__(self) -> str:
        return f"Router(routes={self.count()})"

    def _adopt(self, route: Route) -> None:
        if not self.config.eager_compile:
            return
        leaves = route.get_routes() if route.is_group() else (route,)
        for leaf in leaves:
            leaf.compile()

    # -- Generation --

    def generate(self, name: str, parameters: GenerateParameters | None = None) -> str:
        """Generate the URL of the route named *name*.

        Every route sharing the name is tried. The one consuming the
        most parameters in its path wins.

        Raises:
            RouteNotFound: No route is named *name*.
            AmbiguousRoute: Several routes tie for the most parameters.
            MissingAttributes: No candidate could be generated; the
                first candidate's error is re-raised.
        """
        values = merge_parameters(parameters)
        by_specificity: dict[int, list[str]] = defaultdict(list)
        failures: list[RoutingError] = []

        for route in self.get_routes():
            if route.name != name:
                continue
            try:
                url, used = route.generate_counted(values)
            except RoutingError as exc:
                self._logger.debug("Route %r cannot generate %r: %s", route, name, exc)
                failures.append(exc)
                continue
            by_specificity[used].append(url)

        if not by_specificity:
            if failures:
                raise failures[0]
            raise RouteNotFound(name)

        candidates = by_specificity[max(by_specificity)]
        if len(candidates) > 1:
            raise AmbiguousRoute(name, tuple(candidates))
        return candidates[0]

    # -- Matching --

    def is_valid(self, request: RoutableRequest | str) -> bool:
        """Return True if any route accepts *request*.

        A bare path string is tested as a request using
        ``config.default_method``.
        """
        if isinstance(request, str):
            request = Request.from_url(request, method=self.config.default_method)
        return any(route.test(request) for route in self.get_routes())

    def handle(self, request: R) -> tuple[Route | None, R]:
        """Find the route accepting *request*.

        Returns ``(route, request)`` where the returned request carries
        the captured path attributes. Use that request downstream; the
        one passed in is left untouched. Returns ``(None, request)``
        when nothing matches.
        """
        self._logger.debug("Handling %s %s", request.method, request.path)

        attributes: dict[str, Any] = {}
        route = self.search_route(request, attributes)

        if route is None:
            self._logger.debug("No route for %s %s", request.method, request.path)
            return None, request

        self._logger.debug("Route found: %r %s", route, attributes)
        return route, request.with_attributes(attributes)

    # -- Serialization --

    def to_dict(self) -> dict[str, Any]:
        return {"routes": [route.to_dict() for route in self._routes]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], config: RouterConfig | None = None) -> Router:
        router = cls(config)
        router.add_route(*(Route.from_dict(route) for route in data.get("routes", ())))
        return router

    def __getstate__(self) -> dict[str, Any]:
        return {"routes": self._routes, "config": self.config}

    def __setstate__(self, state: dict[str, Any]) -> None:
        self._routes = state["routes"]
        self.config = state["config"]
        self._logger = logging.getLogger(self.config.logger_name)
