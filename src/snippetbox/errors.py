"""Snippetbox exception hierarchy.

Shared by the router, the static file server and the ASGI handler so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class SnippetboxError(Exception):
    """Base for all snippetbox-specific errors."""


class ConfigurationError(SnippetboxError):
    """Raised when a route pattern or route table is invalid.

    Surfaces at registration time, before the server starts.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SnippetboxError):
    """An error that maps directly to an HTTP status code.

    Raised by the router, the file server, or handlers. The ASGI handler
    turns it into a plain-text response without logging it.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route or file matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818
    """405 — the path is routed, but not for this HTTP method.

    Carries an ``Allow`` header listing the methods that are routed.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        super().__init__(
            status=405,
            detail=detail or f"Method not allowed. Allowed methods: {allow_value}",
            headers=(("Allow", allow_value),),
        )


class RedirectSlash(HTTPError):  # noqa: N818
    """301 — the path only matches once a trailing slash is added.

    ``/static`` is redirected to ``/static/`` when ``/static/`` is a
    subtree route.
    """

    def __init__(self, location: str) -> None:
        super().__init__(
            status=301,
            detail=f"Moved Permanently to {location}",
            headers=(("Location", location),),
        )

    @property
    def location(self) -> str:
        return self.headers[0][1]
