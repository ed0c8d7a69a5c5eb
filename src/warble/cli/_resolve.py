"""Router loading for the ``warble`` subcommands.

An import string names whatever holds the routes: a Router, a bare
RouteSet or Route, a controller class or function carrying ``@route``
declarations, or a factory returning one of those. Everything is
normalized to a Router so the subcommands only deal with one type.
"""

import importlib
import inspect
import sys
from typing import Any

from warble.discovery import declarations_of, routes_from_class, routes_from_function
from warble.routing.route_set import RouteSet
from warble.routing.router import Router

DEFAULT_ATTRIBUTE = "router"


def _has_declarations(target: Any) -> bool:
    if declarations_of(target):
        return True
    if not inspect.isclass(target):
        return False
    return any(
        declarations_of(member) for klass in target.__mro__ for member in vars(klass).values()
    )


def as_router(target: Any) -> Router:
    """Wrap *target* in a Router.

    Routers are returned as is. Route sets and single routes are added
    to a fresh Router. Decorated classes and functions go through route
    discovery.

    Raises ``TypeError`` when *target* holds no routes.
    """
    if isinstance(target, Router):
        return target
    if isinstance(target, RouteSet):
        # Routes, groups included, are added whole
        routes = target.routes if type(target) is RouteSet else (target,)
        return Router().add_route(*routes)
    if _has_declarations(target):
        if inspect.isclass(target):
            discovered = routes_from_class(target)
        else:
            discovered = routes_from_function(target)
        return Router().merge(discovered)

    msg = f"{type(target).__name__} holds no routes"
    raise TypeError(msg)


def resolve_router(import_string: str) -> Router:
    """Load the routes named by *import_string* as a Router.

    ``"module:attribute"`` names the object; ``"module"`` alone means
    ``module.router``. A plain callable without ``@route`` declarations
    is treated as a factory and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the object (or factory result) holds no routes.
    """
    module_path, _, attr_name = import_string.partition(":")
    target = getattr(importlib.import_module(module_path), attr_name or DEFAULT_ATTRIBUTE)

    is_factory = (
        callable(target)
        and not isinstance(target, RouteSet)
        and not inspect.isclass(target)
        and not _has_declarations(target)
    )
    if is_factory:
        try:
            target = target()
        except Exception as exc:
            msg = f"Router factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    try:
        return as_router(target)
    except TypeError as exc:
        msg = f"{import_string!r} is not a warble Router source: {exc}"
        raise TypeError(msg) from exc


def load_router(import_string: str) -> Router:
    """``resolve_router`` for subcommands: report failures and exit with code 1."""
    try:
        return resolve_router(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
