"""Warble CLI: inspect and exercise a router from the shell.

Entry point registered as ``warble`` in ``pyproject.toml``::

    [project.scripts]
    warble = "warble.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``warble`` command."""
    parser = argparse.ArgumentParser(
        prog="warble",
        description="Warble: URL routing and generation.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- warble routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument("router", help="Import string (e.g. myapp:router)")

    # -- warble match -------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Find the route matching a path")
    match_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    match_parser.add_argument("path", help="Request path or absolute URL")
    match_parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")
    match_parser.add_argument("--host", default=None, help="Request host")

    # -- warble url ---------------------------------------------------------
    url_parser = subparsers.add_parser("url", help="Generate the URL of a named route")
    url_parser.add_argument("router", help="Import string (e.g. myapp:router)")
    url_parser.add_argument("name", help="Route name")
    url_parser.add_argument("params", nargs="*", help="Route attributes as key=value")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from warble.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from warble.cli._match import run_match

        run_match(args)
    elif args.command == "url":
        from warble.cli._match import run_url

        run_url(args)
