"""Async test client for perch applications.

Uses the same Response type as production and sends requests through the
ASGI interface directly. No HTTP involved.
"""

from __future__ import annotations

from typing import Any

from perch.app import App
from perch.http.response import Response


class TestClient:
    """Async test client for perch applications.

    Entering the client starts the app's route supervisor (the same step
    ASGI lifespan startup performs); leaving it stops the reload thread.

    Usage::

        async with TestClient(app) as client:
            response = await client.get("/net/lldp?go-get=1", host="example.com")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("app",)

    def __init__(self, app: App) -> None:
        self.app = app

    async def __aenter__(self) -> TestClient:
        self.app.supervisor.start()
        return self

    async def __aexit__(self, *args: object) -> None:
        self.app.supervisor.stop()

    async def get(
        self,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, host=host, headers=headers)

    async def go_get(self, path: str, *, host: str = "example.com") -> Response:
        """Send a discovery request the way the ``go`` tool does (``?go-get=1``)."""
        separator = "&" if "?" in path else "?"
        return await self.get(f"{path}{separator}go-get=1", host=host)

    async def request(
        self,
        method: str,
        path: str,
        *,
        host: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        if "?" in path:
            path_part, query_string = path.split("?", 1)
        else:
            path_part = path
            query_string = ""

        raw_headers: list[tuple[bytes, bytes]] = []
        if host is not None:
            raw_headers.append((b"host", host.encode("latin-1")))
        for name, value in (headers or {}).items():
            raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "path": path_part,
            "raw_path": path_part.encode("utf-8"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        async def receive() -> dict[str, Any]:
            return {"type": "http.request", "body": b"", "more_body": False}

        response_status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        response_body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal response_status, response_headers
            if message["type"] == "http.response.start":
                response_status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                response_body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = "text/html; charset=utf-8"
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name_str = name_b.decode("latin-1")
            value_str = value_b.decode("latin-1")
            if name_str == "content-type":
                content_type = value_str
            elif name_str != "content-length":
                extra_headers.append((name_str, value_str))

        return Response(
            body=b"".join(response_body_parts),
            status=response_status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
