"""Async test client for snippetbox.

Drives the ASGI app in process, without sockets, and returns the same
``Response`` type the handlers produce.
"""

import asyncio
from typing import Any

from snippetbox._internal.asgi import ASGIApp, Message
from snippetbox.http.response import TEXT_PLAIN, Response


class TestClient:
    """Async test client for an ASGI app.

    Runs the lifespan protocol on enter and exit, then sends each request
    through the app directly::

        async with TestClient(mux) as client:
            response = await client.get("/")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("_lifespan", "_lifespan_in", "_lifespan_out", "app")

    def __init__(self, app: ASGIApp) -> None:
        self.app = app
        self._lifespan: asyncio.Task[None] | None = None
        self._lifespan_in: asyncio.Queue[Message] = asyncio.Queue()
        self._lifespan_out: asyncio.Queue[Message] = asyncio.Queue()

    async def __aenter__(self) -> "TestClient":
        scope = {"type": "lifespan", "asgi": {"version": "3.0"}}
        self._lifespan = asyncio.create_task(
            self.app(scope, self._lifespan_in.get, self._lifespan_out.put)
        )
        await self._lifespan_in.put({"type": "lifespan.startup"})
        message = await self._lifespan_out.get()
        if message["type"] != "lifespan.startup.complete":
            msg = f"Lifespan startup failed: {message.get('message', message['type'])}"
            raise RuntimeError(msg)
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._lifespan_in.put({"type": "lifespan.shutdown"})
        await self._lifespan_out.get()
        if self._lifespan is not None:
            await self._lifespan

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def head(self, path: str, *, headers: dict[str, str] | None = None) -> Response:
        """Send a HEAD request."""
        return await self.request("HEAD", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers, body=body)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
    ) -> Response:
        """Send an arbitrary request through the ASGI app."""
        path_part, _, query_string = path.partition("?")

        raw_headers: list[tuple[bytes, bytes]] = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in (headers or {}).items()
        ]

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": ("127.0.0.1", 0),
        }

        request_body = body or b""
        body_sent = False

        async def receive() -> Message:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        status = 200
        response_headers: list[tuple[bytes, bytes]] = []
        body_parts: list[bytes] = []

        async def send(message: Message) -> None:
            nonlocal status, response_headers
            if message["type"] == "http.response.start":
                status = message["status"]
                response_headers = list(message.get("headers", []))
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.app(scope, receive, send)

        content_type = TEXT_PLAIN
        extra_headers: list[tuple[str, str]] = []
        for name_b, value_b in response_headers:
            name = name_b.decode("latin-1")
            value = value_b.decode("latin-1")
            if name == "content-type":
                content_type = value
            else:
                extra_headers.append((name, value))

        return Response(
            body=b"".join(body_parts),
            status=status,
            content_type=content_type,
            headers=tuple(extra_headers),
        )
