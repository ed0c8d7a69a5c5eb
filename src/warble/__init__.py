"""Warble: URL routing with optional segments, route groups, and reverse generation.

Basic usage::

    from warble import Request, Route, Router

    router = Router()
    router.add_route(Route("/blog[/{page::int}]", name="blog"))

    route, request = router.handle(Request.from_url("/blog/2"))
    request.attributes          # {"page": "2"}
    router.generate("blog")     # "/blog"

Route groups share a path prefix, constraints and defaults::

    api = Route("/api/{version}", requirements={"version": r"v\\d+"})
    api.add_route(Route("/users/{id::int}", name="user"))
    router.add_route(api)
"""

__version__ = "0.1.0-dev"
__all__ = [
    "AmbiguousRoute",
    "Attribute",
    "MissingAttributes",
    "Request",
    "Route",
    "RouteDefinitionError",
    "RouteNotFound",
    "RouteSet",
    "Router",
    "RouterConfig",
    "RoutingError",
    "WarbleError",
    "route",
    "routes_from_class",
    "routes_from_function",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import warble`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from warble.routing.router import Router

        return Router

    if name == "Route":
        from warble.routing.route import Route

        return Route

    if name == "RouteSet":
        from warble.routing.route_set import RouteSet

        return RouteSet

    if name == "Attribute":
        from warble.routing.attribute import Attribute

        return Attribute

    if name == "RouterConfig":
        from warble.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from warble.http.request import Request

        return Request

    if name in ("route", "routes_from_class", "routes_from_function"):
        from warble import discovery as _discovery

        return getattr(_discovery, name)

    if name in (
        "AmbiguousRoute",
        "MissingAttributes",
        "RouteDefinitionError",
        "RouteNotFound",
        "RoutingError",
        "WarbleError",
    ):
        from warble import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
