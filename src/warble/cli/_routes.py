"""``warble routes``: list registered routes.

Resolves an import string to a Router and prints every leaf route with
its methods, full path, name and hosts.
"""

import argparse

from warble.cli._resolve import load_router
from warble.routing.route import Route

HEADERS = ("METHOD", "PATH", "NAME", "HOST")


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of METHOD, PATH, NAME and HOST for each route."""
    router = load_router(args.router)

    rows = [_describe(route) for route in router.get_routes()]
    if not rows:
        print("No routes registered.")
        return

    table = [HEADERS, *rows]
    widths = [max(len(row[column]) for row in table) for column in range(len(HEADERS) - 1)]
    for index, row in enumerate(table):
        cells = [cell.ljust(width) for cell, width in zip(row, widths, strict=False)]
        print("  ".join([*cells, row[-1]]))
        if index == 0:
            print("-" * min(sum(widths) + 2 * len(widths) + len(row[-1]), 80))


def _describe(route: Route) -> tuple[str, str, str, str]:
    hosts = ", ".join(route.hosts) if route.hosts is not None else "*"
    return (", ".join(route.get_methods()), route.get_path(), route.name or "-", hosts)
