"""Immutable HTTP request.

Frozen metadata with async body access. Built once per ASGI scope by
the request handler; the router's captures are attached with
``dataclasses.replace`` after matching.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from snippetbox._internal.asgi import Receive, Scope
from snippetbox.http.headers import Headers
from snippetbox.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    ``path`` is the percent-decoded path from the ASGI scope.
    ``path_params`` holds the named segments captured by the route
    pattern (``{id}`` in ``/snippet/view/{id}``).
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    path_params: dict[str, str]

    # ASGI receive callable for the body
    _receive: Receive

    # Body cache; the dict is mutable even though the field is frozen
    _cache: dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def path_value(self, name: str) -> str:
        """Return the path segment captured as *name*, or ``""``."""
        return self.path_params.get(name, "")

    @property
    def url(self) -> str:
        """Request path plus query string."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs}"
        return self.path

    async def body(self) -> bytes:
        """Read the full request body.

        The ASGI receive channel is consumed once; later calls return the
        cached bytes.
        """
        if "_body" in self._cache:
            return self._cache["_body"]
        chunks: list[bytes] = []
        while True:
            message = await self._receive()
            if message["type"] == "http.disconnect":
                break
            chunks.append(message.get("body", b""))
            if not message.get("more_body", False):
                break
        result = b"".join(chunks)
        self._cache["_body"] = result
        return result

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope."""
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            path_params={},
            _receive=receive,
        )
