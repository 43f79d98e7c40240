"""Immutable HTTP request.

Discovery requests carry no body worth reading, so the request is just
the frozen metadata the dispatcher needs: method, path, host, query.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from urllib.parse import parse_qs


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Header names are lower-cased; for repeated headers and query keys the
    first value wins.
    """

    method: str
    path: str
    headers: Mapping[str, str]
    query: Mapping[str, str]
    server: tuple[str, int] | None = None

    @property
    def host(self) -> str:
        """The ``Host`` header, falling back to the server address."""
        host = self.headers.get("host")
        if host:
            return host
        if self.server is None:
            return ""
        name, port = self.server
        if port in (80, 443):
            return name
        return f"{name}:{port}"

    @classmethod
    def from_asgi(cls, scope: Mapping[str, Any]) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        headers: dict[str, str] = {}
        for raw_name, raw_value in scope.get("headers", ()):
            name = raw_name.decode("latin-1").lower()
            headers.setdefault(name, raw_value.decode("latin-1"))

        query_string = scope.get("query_string", b"").decode("latin-1")
        query = {
            key: values[0]
            for key, values in parse_qs(query_string, keep_blank_values=True).items()
        }

        server = scope.get("server")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=MappingProxyType(headers),
            query=MappingProxyType(query),
            server=tuple(server) if server else None,
        )
