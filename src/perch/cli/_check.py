"""``perch check`` and ``perch resolve``: offline route-file tools.

Both load the file exactly the way the server does, so an operator can
validate an edit before sending SIGHUP.
"""

import argparse
import sys

from perch.errors import RouteFileError
from perch.routing.loader import load_routes
from perch.routing.table import RouteTable


def _load_or_exit(path: str) -> RouteTable:
    try:
        return load_routes(path)
    except RouteFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def run_check(args: argparse.Namespace) -> None:
    """Print every route in the file, sorted by prefix, then a count."""
    table = _load_or_exit(args.routes)
    for prefix in sorted(table):
        source = table[prefix]
        print(f"{prefix} {source.vcs} {source.url}")
    noun = "route" if len(table) == 1 else "routes"
    print(f"{args.routes}: {len(table)} {noun} OK")


def run_resolve(args: argparse.Namespace) -> None:
    """Print ``root vcs url`` for the route serving ``args.path``."""
    table = _load_or_exit(args.routes)
    match = table.resolve(args.path)
    if match is None:
        print(f"no route for {args.path}", file=sys.stderr)
        raise SystemExit(1)
    print(f"{match.root} {match.vcs} {match.url}")
