"""``warble match`` and ``warble url``: try the router from the shell.

``match`` reports which route accepts a request and the attributes it
captures. ``url`` generates a URL from a route name and ``key=value``
pairs. Both exit with code 1 when the router has no answer.
"""

import argparse
import sys

from warble.cli._resolve import load_router
from warble.errors import RoutingError
from warble.http.request import Request


def run_match(args: argparse.Namespace) -> None:
    """Print the route matching ``args.path`` and its attributes."""
    router = load_router(args.router)
    request = Request.from_url(args.path, method=args.method)
    if args.host is not None:
        request = Request(method=request.method, path=request.path, host=args.host)

    route, request = router.handle(request)
    if route is None:
        print(f"No route matches {request.method} {request.path!r}", file=sys.stderr)
        raise SystemExit(1)

    print(f"{route.name or '-'}  {route.get_path()}")
    for name, value in request.attributes.items():
        print(f"  {name} = {value}")


def run_url(args: argparse.Namespace) -> None:
    """Print the URL generated for ``args.name`` from ``key=value`` pairs."""
    router = load_router(args.router)

    parameters: dict[str, str] = {}
    for pair in args.params:
        key, sep, value = pair.partition("=")
        if not sep:
            print(f"Error: expected key=value, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        parameters[key] = value

    try:
        print(router.generate(args.name, parameters))
    except RoutingError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
