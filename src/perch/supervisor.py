"""Route table supervisor: publish, reload, swap.

The supervisor owns the one reference to the current RouteTable. Request
handlers read it with ``current()``; a single maintenance thread replaces
it when a reload is triggered.

Free-threading safety:
    - RouteTable is immutable, so a published table is safe to share
    - Publishing is one attribute assignment of a fully built table;
      ``current()`` is one attribute read and never takes a lock
    - ``_reload_lock`` serializes reloads; it is never held by readers
    - ``_listeners_lock`` protects the subscriber list
"""

from __future__ import annotations

import logging
import os
import signal
import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from perch.errors import RouteFileError
from perch.routing.loader import load_routes
from perch.routing.table import RouteTable

logger = logging.getLogger("perch.supervisor")

Loader = Callable[[Path], RouteTable]
ReloadListener = Callable[["ReloadOutcome"], Any]


class SupervisorState(Enum):
    INITIALIZING = "initializing"
    SERVING = "serving"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True)
class ReloadOutcome:
    """Report of one reload attempt.

    ``generation`` and ``routes`` describe the table that is published
    after the attempt: the new one on success, the untouched previous one
    on failure.
    """

    ok: bool
    generation: int
    routes: int
    error: RouteFileError | None = None


class ConfigSupervisor:
    """Owns the published RouteTable and replaces it on reload.

    Usage::

        supervisor = ConfigSupervisor("/etc/perch/routes")
        supervisor.start()              # raises RouteFileError if the file is bad
        supervisor.install_signal_handler()

        table = supervisor.current()    # in a request handler
        match = table.resolve(path)

    Overlapping triggers coalesce: any number of ``trigger_reload()`` calls
    made before the maintenance thread wakes up produce one reload, and
    triggers that arrive during a reload produce exactly one more.
    """

    __slots__ = (
        "_generation",
        "_listeners",
        "_listeners_lock",
        "_loader",
        "_path",
        "_reload_lock",
        "_start_lock",
        "_state",
        "_stopping",
        "_table",
        "_thread",
        "_wake",
    )

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        loader: Loader = load_routes,
    ) -> None:
        self._path = Path(path)
        self._loader = loader
        self._table: RouteTable | None = None
        self._generation = 0
        self._state = SupervisorState.INITIALIZING
        self._start_lock = threading.Lock()
        self._reload_lock = threading.Lock()
        self._wake = threading.Event()
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None
        self._listeners: list[ReloadListener] = []
        self._listeners_lock = threading.Lock()

    # -- Introspection --

    @property
    def path(self) -> Path:
        """The route file. Fixed for the supervisor's lifetime."""
        return self._path

    @property
    def state(self) -> SupervisorState:
        return self._state

    @property
    def generation(self) -> int:
        """Number of tables published so far (1 after a successful start)."""
        return self._generation

    # -- Lifecycle --

    def start(self) -> RouteTable:
        """Load the initial table and start the maintenance thread.

        A failed initial load is fatal: the ``RouteFileError`` propagates
        and the supervisor stays in ``INITIALIZING``. Calling ``start()``
        on a running supervisor returns the current table.
        """
        with self._start_lock:
            if self._state is SupervisorState.SERVING:
                return self.current()
            if self._state is SupervisorState.STOPPED:
                msg = "ConfigSupervisor cannot be restarted after stop()."
                raise RuntimeError(msg)

            table = self._loader(self._path)
            self._publish(table)
            logger.info("Loaded %d routes from %s", len(table), self._path)

            self._stopping.clear()
            self._thread = threading.Thread(
                target=self._run,
                name="perch-reload",
                daemon=True,
            )
            self._thread.start()
            self._state = SupervisorState.SERVING
            return table

    def stop(self, timeout: float | None = None) -> None:
        """Stop the maintenance thread. The last table stays readable."""
        with self._start_lock:
            if self._state is not SupervisorState.SERVING:
                self._state = SupervisorState.STOPPED
                return
            self._stopping.set()
            self._wake.set()
            thread = self._thread
            self._thread = None
            self._state = SupervisorState.STOPPED
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    # -- Readers --

    def current(self) -> RouteTable:
        """Return the published table.

        Never blocks on a reload in progress and never returns a partially
        built table.
        """
        table = self._table
        if table is None:
            msg = "ConfigSupervisor.current() called before start()."
            raise RuntimeError(msg)
        return table

    # -- Reload --

    def trigger_reload(self) -> None:
        """Ask the maintenance thread to reload. Returns immediately."""
        self._wake.set()

    def reload(self) -> ReloadOutcome:
        """Reload the route file now, on the calling thread.

        On success the new table replaces the published one; on failure
        the published table is left untouched and the error is logged.
        Never raises a ``RouteFileError``.
        """
        if self._table is None:
            msg = "ConfigSupervisor.reload() called before start()."
            raise RuntimeError(msg)
        with self._reload_lock:
            try:
                table = self._loader(self._path)
            except RouteFileError as exc:
                previous = self.current()
                logger.warning(
                    "Reload failed, keeping %d routes (generation %d): %s",
                    len(previous),
                    self._generation,
                    exc,
                )
                outcome = ReloadOutcome(
                    ok=False,
                    generation=self._generation,
                    routes=len(previous),
                    error=exc,
                )
            else:
                self._publish(table)
                logger.info(
                    "Reloaded %d routes from %s (generation %d)",
                    len(table),
                    self._path,
                    self._generation,
                )
                outcome = ReloadOutcome(
                    ok=True,
                    generation=self._generation,
                    routes=len(table),
                )

        self._notify(outcome)
        return outcome

    def subscribe(self, listener: ReloadListener) -> Callable[[], None]:
        """Call *listener* with every ReloadOutcome. Returns an unsubscribe callable."""
        with self._listeners_lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._listeners_lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def install_signal_handler(self, signum: int | str | None = "SIGHUP") -> Any:
        """Route an OS signal to ``trigger_reload()``.

        Must be called from the main thread. Returns the previous handler,
        or ``None`` when the platform has no such signal.
        """
        if signum is None:
            return None
        if isinstance(signum, str):
            resolved = getattr(signal, signum, None)
            if resolved is None:
                logger.debug("Signal %s not available; reload trigger not installed", signum)
                return None
            signum = resolved

        def _on_signal(received: int, frame: object) -> None:
            self.trigger_reload()

        previous = signal.signal(signum, _on_signal)
        logger.debug("Reloading %s on %s", self._path, signal.Signals(signum).name)
        return previous

    # -- Internal --

    def _publish(self, table: RouteTable) -> None:
        self._table = table
        self._generation += 1

    def _notify(self, outcome: ReloadOutcome) -> None:
        with self._listeners_lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(outcome)
            except Exception:
                logger.exception("Reload listener %r failed", listener)

    def _run(self) -> None:
        """Maintenance loop: wait for a trigger, reload, repeat."""
        while True:
            self._wake.wait()
            if self._stopping.is_set():
                return
            self._wake.clear()
            try:
                self.reload()
            except Exception:
                logger.exception("Reload crashed; keeping generation %d", self._generation)
