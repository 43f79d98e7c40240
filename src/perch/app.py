"""Perch application class.

Configured at construction, frozen at runtime when ``app.run()`` or
``__call__()`` is first invoked.
"""

from __future__ import annotations

import logging
import threading

from kida import Environment

from perch._internal.asgi import Receive, Scope, Send
from perch.config import AppConfig
from perch.server.handler import handle_request
from perch.supervisor import ConfigSupervisor, SupervisorState
from perch.templating.page import DiscoveryPage

logger = logging.getLogger("perch.server")


class App:
    """The perch application: an ASGI callable serving go-import pages.

    Usage::

        app = App(AppConfig(routes_file="routes.txt"))
        app.run()

    Thread safety:
        The freeze transition uses a Lock + double-check to ensure exactly
        one thread compiles the app, even under free-threading where
        multiple ASGI workers could call ``__call__()`` concurrently on
        first request. After the freeze, each request reads the current
        route table from the supervisor once and uses only that table.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        "_page",
        "_supervisor",
        "config",
    )

    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        supervisor: ConfigSupervisor | None = None,
        kida_env: Environment | None = None,
    ) -> None:
        self.config: AppConfig = config or AppConfig()
        self._supervisor: ConfigSupervisor | None = supervisor
        self._kida_env: Environment | None = kida_env
        self._page: DiscoveryPage | None = None
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    @property
    def supervisor(self) -> ConfigSupervisor:
        """The route-table supervisor. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._supervisor is not None
        return self._supervisor

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Load the routes and start serving.

        The initial route load happens before the server binds: a bad
        route file raises ``RouteFileError`` and nothing is served.

        - **Development mode** (debug=True): single pounce worker
        - **Production mode** (debug=False): ``config.workers`` workers
        """
        supervisor = self.supervisor
        supervisor.start()
        if self.config.reload_signal:
            supervisor.install_signal_handler(self.config.reload_signal)

        _host = host or self.config.host
        _port = port or self.config.port
        logger.info("Listening on %s:%d", _host, _port)

        if self.config.debug:
            from perch.server.dev import run_dev_server

            run_dev_server(self, _host, _port)
        else:
            from perch.server.production import run_production_server

            run_production_server(
                self,
                host=_host,
                port=_port,
                workers=self.config.workers,
                log_level=self.config.log_level,
                log_format=self.config.log_format,
            )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()
        assert self._supervisor is not None
        assert self._page is not None

        if self._supervisor.state is SupervisorState.INITIALIZING:
            # Served without lifespan support: load on first request.
            self._supervisor.start()

        await handle_request(
            scope,
            receive,
            send,
            table=self._supervisor.current(),
            page=self._page,
            config=self.config,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Startup loads the initial route table; a failure is reported as
        ``lifespan.startup.failed`` so the server refuses to come up.
        Shutdown stops the reload thread.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self.supervisor.start()
                except Exception as exc:
                    logger.error("Startup failed: %s", exc)
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                if self._supervisor is not None:
                    self._supervisor.stop()
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        if self._supervisor is None:
            self._supervisor = ConfigSupervisor(self.config.require_routes_file())
        self._page = DiscoveryPage(self._kida_env)
        self._frozen = True
