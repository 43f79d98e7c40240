"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path

from perch.errors import ConfigurationError

DEFAULT_PORT = 9625


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    Only ``routes_file`` has no usable default::

        config = AppConfig(routes_file="/etc/perch/routes", port=8080)
    """

    # Server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    debug: bool = False
    workers: int = 1  # threads share one route table; keep at 1 for process-based servers

    # Routes
    routes_file: str | Path | None = None
    reload_signal: str | None = "SIGHUP"  # None disables the OS signal trigger

    # Discovery
    discovery_param: str = "go-get"
    redirect_base: str = "https://pkg.go.dev/"

    # Logging
    log_level: str = "info"
    log_format: str = "text"

    def require_routes_file(self) -> Path:
        """Return ``routes_file`` as a Path, or raise ConfigurationError."""
        if not self.routes_file:
            msg = "AppConfig.routes_file is required to serve vanity imports."
            raise ConfigurationError(msg)
        return Path(self.routes_file)


def parse_address(addr: str) -> tuple[str, int]:
    """Split a ``host:port`` bind address.

    An empty host (``":9625"``) means every interface. A bare host with no
    port keeps the default port.

    Examples::

        ":9625"          -> ("0.0.0.0", 9625)
        "127.0.0.1:8080" -> ("127.0.0.1", 8080)
        "[::1]:9625"     -> ("::1", 9625)
        "localhost"      -> ("localhost", 9625)
    """
    host, sep, port_text = addr.rpartition(":")
    if not sep or "]" in port_text:
        host, port_text = addr, ""
    host = host.strip("[]") or "0.0.0.0"
    if not port_text:
        return host, DEFAULT_PORT
    try:
        port = int(port_text)
    except ValueError:
        msg = f"Invalid bind address {addr!r}: port must be a number."
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"Invalid bind address {addr!r}: port out of range."
        raise ConfigurationError(msg)
    return host, port
