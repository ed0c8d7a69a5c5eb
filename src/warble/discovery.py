"""Route discovery from decorated classes and functions.

Controllers declare their routes next to the code handling them::

    @route("/users", methods="GET")
    class UserController:
        @route("/{id::int}", name="user")
        def show(self, id): ...

    router.add_route(*routes_from_class(UserController).routes)

A class-level declaration sets the base path and base options of every
method route. Each discovered route gets a context naming its target
(``_class``/``_method`` or ``_function``).
"""

import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, TypeVar

from warble.errors import RouteDefinitionError
from warble.routing.route import Route
from warble.routing.route_set import RouteSet

logger = logging.getLogger("warble.discovery")

T = TypeVar("T")

ROUTES_ATTRIBUTE = "__warble_routes__"

# Declaration keys passed straight to the Route constructor;
# anything else lands in the route options
_ROUTE_KEYWORDS = frozenset(
    {"defaults", "requirements", "name", "methods", "hosts", "priority", "options"}
)


@dataclass(frozen=True, slots=True)
class RouteDeclaration:
    """A ``@route`` declaration attached to a class or function."""

    path: str
    options: Mapping[str, Any] = field(default_factory=dict)


def route(path: str, **options: Any) -> Callable[[T], T]:
    """Declare a route on a function, method, or controller class.

    Stackable: each decorator adds one route, in source order.
    """

    def decorator(target: T) -> T:
        declarations = declarations_of(target)
        # Decorators apply bottom-up; prepend to keep source order
        setattr(target, ROUTES_ATTRIBUTE, (RouteDeclaration(path, options), *declarations))
        return target

    return decorator


def declarations_of(target: object) -> tuple[RouteDeclaration, ...]:
    """Return the declarations made directly on *target* (not inherited)."""
    return getattr(target, "__dict__", {}).get(ROUTES_ATTRIBUTE, ())


def join_paths(base: str, path: str) -> str:
    """Join *base* and *path* with exactly one slash between them."""
    base = base.strip("/")
    path = path.lstrip("/")
    if base and path:
        return f"/{base}/{path}"
    return "/" + (base or path)


def build_route(
    path: str,
    options: Mapping[str, Any],
    context: Mapping[str, Any] | None = None,
) -> Route:
    """Create a Route from declaration *options*."""
    keywords = {key: value for key, value in options.items() if key in _ROUTE_KEYWORDS}
    extra = {key: value for key, value in options.items() if key not in _ROUTE_KEYWORDS}
    route_options = {**extra, **(keywords.pop("options", None) or {})}
    return Route(path, options=route_options, context=dict(context or {}), **keywords)


def _is_route_method(cls: type, name: str) -> bool:
    if name.startswith("_"):
        return False
    member = inspect.getattr_static(cls, name)
    if not inspect.isfunction(member):
        return False
    return not getattr(member, "__isabstractmethod__", False)


def routes_from_class(
    cls: type,
    base_path: str = "",
    context: Mapping[str, Any] | None = None,
) -> RouteSet:
    """Collect the routes declared on the public methods of *cls*.

    Inherited methods are included, base classes first. Static and
    class methods are ignored.

    Raises ``RouteDefinitionError`` if *cls* itself has more than one
    ``@route`` declaration.
    """
    route_set = RouteSet()
    class_declarations = declarations_of(cls)
    if len(class_declarations) > 1:
        msg = f'Controller "{cls.__qualname__}" must not declare @route more than once'
        raise RouteDefinitionError(msg)

    base_options: dict[str, Any] = {}
    if class_declarations:
        base_path = join_paths(base_path, class_declarations[0].path)
        base_options = dict(class_declarations[0].options)

    class_name = f"{cls.__module__}.{cls.__qualname__}"
    names = dict.fromkeys(name for klass in reversed(cls.__mro__) for name in vars(klass))
    for name in names:
        if not _is_route_method(cls, name):
            continue
        for declaration in declarations_of(inspect.getattr_static(cls, name)):
            path = join_paths(base_path, declaration.path)
            route_context = {**(context or {}), "_class": class_name, "_method": name}
            route_set.add_route(
                build_route(path, {**base_options, **declaration.options}, route_context)
            )
            logger.debug("Discovered route %s for %s.%s", path, class_name, name)

    return route_set


def routes_from_function(
    func: Callable[..., Any],
    base_path: str = "",
    context: Mapping[str, Any] | None = None,
) -> RouteSet:
    """Collect the routes declared on a plain function."""
    route_set = RouteSet()
    function_name = f"{func.__module__}.{func.__qualname__}"
    for declaration in declarations_of(func):
        path = join_paths(base_path, declaration.path)
        route_context = {**(context or {}), "_function": function_name}
        route_set.add_route(build_route(path, declaration.options, route_context))
        logger.debug("Discovered route %s for %s", path, function_name)
    return route_set
