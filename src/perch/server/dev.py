"""Development server.

Starts a pounce ASGI server with the live perch App object in
single-worker mode. Route-file reload still goes through the supervisor;
pounce's code reload is not used.
"""

from __future__ import annotations


def run_dev_server(app: object, host: str, port: int) -> None:
    """Start a single-worker pounce server with the given perch App.

    Pounce's ``run()`` takes an import string, but perch has a live
    ``App`` object, so ``pounce.Server`` is used directly with the ASGI
    callable.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    server = Server(config, app)
    server.run()
