"""Perch: vanity import paths for the go tool.

Maps path prefixes to version-control repositories and answers
``?go-get=1`` discovery requests with a ``go-import`` meta tag. The route
file is reloaded on SIGHUP without interrupting requests in flight.

Basic usage::

    from perch import App, AppConfig

    app = App(AppConfig(routes_file="routes.txt"))
    app.run()

Route file::

    # prefix     vcs  repository
    /net/lldp    git  https://example.org/net/lldp.git
"""

# Declare free-threading support (PEP 703)
_Py_mod_gil = 0

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigSupervisor",
    "ConfigurationError",
    "PerchError",
    "RouteFileError",
    "RouteFileParseError",
    "RouteFileUnreadable",
    "RouteMatch",
    "RouteTable",
    "Source",
    "load_routes",
    "resolve",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast and keeps kida/pounce out of scripts that
    only parse route files.
    """
    if name == "App":
        from perch.app import App

        return App

    if name == "AppConfig":
        from perch.config import AppConfig

        return AppConfig

    if name == "ConfigSupervisor":
        from perch.supervisor import ConfigSupervisor

        return ConfigSupervisor

    if name in ("RouteMatch", "RouteTable", "Source", "load_routes", "resolve"):
        from perch import routing as _routing

        return getattr(_routing, name)

    if name in (
        "ConfigurationError",
        "PerchError",
        "RouteFileError",
        "RouteFileParseError",
        "RouteFileUnreadable",
    ):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
