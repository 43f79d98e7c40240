"""Perch CLI: serve vanity imports, check and query route files.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys

from perch._internal.logs import LOG_FORMATS


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch: vanity import paths for the go tool.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve go-import pages")
    serve_parser.add_argument("routes", help="Route file (prefix vcs url per line)")
    serve_parser.add_argument(
        "-a",
        "--addr",
        default=":9625",
        help="Address to listen on (default: :9625)",
    )
    serve_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )
    serve_parser.add_argument(
        "--redirect-base",
        default=None,
        help="Where browsers without ?go-get=1 are sent (default: https://pkg.go.dev/)",
    )
    serve_parser.add_argument(
        "--no-reload-signal",
        action="store_true",
        help="Do not reload the route file on SIGHUP",
    )
    serve_parser.add_argument("--debug", action="store_true", help="Single-worker debug mode")
    serve_parser.add_argument(
        "--log-level",
        default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Log level (default: info)",
    )
    serve_parser.add_argument(
        "--log-format",
        default="text",
        choices=LOG_FORMATS,
        help="Log format (default: text)",
    )

    # -- perch check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate a route file")
    check_parser.add_argument("routes", help="Route file to validate")

    # -- perch resolve ----------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Show which route serves a path")
    resolve_parser.add_argument("routes", help="Route file")
    resolve_parser.add_argument("path", help="Request path (e.g. /net/lldp/internal)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from perch.cli._serve import serve

        serve(args)
    elif args.command == "check":
        from perch.cli._check import run_check

        run_check(args)
    elif args.command == "resolve":
        from perch.cli._check import run_resolve

        run_resolve(args)
