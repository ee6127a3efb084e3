"""Error responses for the request pipeline.

``HTTPError`` is expected control flow (404, 405, the slash redirect)
and is turned into a response silently. Anything else is a bug in a
handler: it is logged with the request method and URI and answered
with a 500.
"""

import logging
from http import HTTPStatus

from snippetbox.errors import HTTPError, RedirectSlash
from snippetbox.http.request import Request
from snippetbox.http.response import Response


def status_text(status: int) -> str:
    """``404`` -> ``"404 Not Found"``."""
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


def handle_http_error(exc: HTTPError, request: Request) -> Response:
    """Map an HTTPError to a plain-text response."""
    response = Response(body=status_text(exc.status) + "\n", status=exc.status)

    if isinstance(exc, RedirectSlash):
        # Keep the query string on the redirect target
        location = exc.location
        if request.query.raw:
            location = f"{location}?{request.query.raw}"
        return response.with_header("Location", location)

    for name, value in exc.headers:
        response = response.with_header(name, value)
    return response


def handle_internal_error(exc: Exception, request: Request, logger: logging.Logger) -> Response:
    """Log an unexpected handler failure and answer 500."""
    logger.error(
        str(exc) or type(exc).__name__,
        exc_info=exc,
        extra={"method": request.method, "uri": request.url},
    )
    return Response(body=status_text(500) + "\n", status=500)
