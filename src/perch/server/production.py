"""Production server.

Starts pounce with the configured worker count. Workers are threads in
one process, so they all read the same supervisor and see a reload at
the same time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perch.app import App


def run_production_server(
    app: App,
    host: str = "0.0.0.0",
    port: int = 9625,
    workers: int = 1,
    *,
    log_level: str = "info",
    log_format: str = "text",
) -> None:
    """Run a perch app under pounce.

    Args:
        app: Perch App instance.
        host: Bind address (default: all interfaces).
        port: Bind port (default: 9625).
        workers: Worker threads (0 = auto-detect from CPU count).
        log_level: Log level (debug, info, warning, error, critical).
        log_format: Log format ("json" or "text").
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
        log_format=log_format,
    )
    server = Server(config, app)
    server.run()
