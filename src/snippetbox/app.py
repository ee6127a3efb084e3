"""Application context and HTTP handlers.

``Application`` carries the dependencies every handler needs (for now,
just the structured logger). Its bound methods are registered on the
route table by ``snippetbox.routes``.
"""

import logging

from snippetbox.http.request import Request
from snippetbox.http.response import Response


class Application:
    """Shared, read-only dependencies plus the handlers that use them."""

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def home(self, request: Request) -> Response:
        return Response("Hello from Snippetbox")

    def snippet_view(self, request: Request) -> Response:
        snippet_id = request.path_value("id")
        return Response(f"Display a specific snippet with ID {snippet_id}")

    def snippet_create(self, request: Request) -> Response:
        return Response("Display a form for creating a new snippet")

    def snippet_create_post(self, request: Request) -> Response:
        return Response("Save a new snippet...", status=201)
