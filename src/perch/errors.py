"""Perch exception hierarchy.

Shared across the route loader, supervisor, app, and request handler so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when app configuration is invalid.

    Typically caught during ``App._freeze()`` or by the CLI at startup.
    """


class RouteFileError(PerchError):
    """A route file could not be turned into a route table.

    Terminal for one load attempt only. At startup the caller treats it as
    fatal; on reload the supervisor logs it and keeps the current table.
    """

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(filename, reason)
        self.filename = filename
        self.reason = reason

    def __str__(self) -> str:
        return f"{self.filename}: {self.reason}"


class RouteFileUnreadable(RouteFileError):
    """The route file is missing or cannot be read."""


class RouteFileParseError(RouteFileError):
    """A record in the route file is malformed or duplicates an earlier prefix.

    ``line`` is 1-based and points at the offending record (for duplicates,
    the second occurrence).
    """

    def __init__(self, filename: str, line: int, reason: str) -> None:
        super().__init__(filename, reason)
        self.line = line

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}: {self.reason}"


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by the request dispatcher. The ASGI handler catches these and
    turns them into plain-text responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: no registered prefix is an ancestor of the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405: discovery pages are only served for GET.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or "Method Not Allowed",
            headers=(("Allow", allow_value),),
        )
