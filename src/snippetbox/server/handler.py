"""ASGI handler — translates ASGI scope/messages to snippetbox types.

The only component that touches raw ASGI directly. Converts scope dicts
to typed Request objects, dispatches through the router, and sends the
Response back through ASGI ``send()``.
"""

import logging
from dataclasses import replace

from snippetbox._internal.asgi import Receive, Scope, Send
from snippetbox._internal.invoke import invoke
from snippetbox.errors import HTTPError
from snippetbox.http.request import Request
from snippetbox.http.response import Response
from snippetbox.routing.router import Router
from snippetbox.server.errors import handle_http_error, handle_internal_error
from snippetbox.server.sender import send_response


class Mux:
    """ASGI 3 application that dispatches requests through a Router.

    Holds no mutable state: the router is compiled before the first
    request and the logger is only written to.
    """

    __slots__ = ("_logger", "_router")

    def __init__(self, router: Router, logger: logging.Logger) -> None:
        router.compile()
        self._router = router
        self._logger = logger

    @property
    def router(self) -> Router:
        return self._router

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "lifespan":
            await _handle_lifespan(receive, send)
            return
        if scope["type"] != "http":
            return
        await handle_request(scope, receive, send, router=self._router, logger=self._logger)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    logger: logging.Logger,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    request = Request.from_asgi(scope, receive)

    try:
        match = router.match(request.method, request.path)
        request = replace(request, path_params=match.path_params)
        response = await invoke(match.route.handler, request)
        if not isinstance(response, Response):
            msg = f"Handler {match.route.name!r} returned {type(response).__name__}, not Response"
            raise TypeError(msg)
    except HTTPError as exc:
        response = handle_http_error(exc, request)
    except Exception as exc:
        response = handle_internal_error(exc, request, logger)

    await send_response(response, send, head=request.method == "HEAD")


async def _handle_lifespan(receive: Receive, send: Send) -> None:
    """Acknowledge the ASGI lifespan protocol; there is nothing to set up."""
    while True:
        message = await receive()
        if message["type"] == "lifespan.startup":
            await send({"type": "lifespan.startup.complete"})
        elif message["type"] == "lifespan.shutdown":
            await send({"type": "lifespan.shutdown.complete"})
            return
