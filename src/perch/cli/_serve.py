"""``perch serve``: load the route file and start the server.

A route file that fails to load is fatal here: the error goes to stderr
and the process exits with status 1 before anything binds.
"""

import argparse
import sys

from perch._internal.logs import configure_logging
from perch.app import App
from perch.config import AppConfig, parse_address
from perch.errors import ConfigurationError, RouteFileError


def build_config(args: argparse.Namespace) -> AppConfig:
    """Translate ``perch serve`` flags into an AppConfig."""
    host, port = parse_address(args.addr)
    defaults = AppConfig()
    return AppConfig(
        host=host,
        port=port,
        debug=args.debug,
        workers=args.workers if args.workers is not None else defaults.workers,
        routes_file=args.routes,
        reload_signal=None if args.no_reload_signal else defaults.reload_signal,
        redirect_base=args.redirect_base or defaults.redirect_base,
        log_level=args.log_level,
        log_format=args.log_format,
    )


def serve(args: argparse.Namespace) -> None:
    """Start perch with the given CLI arguments."""
    try:
        config = build_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    configure_logging(config.log_level, config.log_format)

    app = App(config)
    try:
        app.run()
    except RouteFileError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
