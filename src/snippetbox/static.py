"""Static file serving.

``FileServer`` serves regular files from a directory tree;
``strip_prefix`` removes the URL prefix the file server is mounted
under. Together they back the ``GET /static/`` route::

    router.handle("GET /static/", strip_prefix("/static", FileServer("./ui/static/")))

Security: the requested path is resolved (symlinks included) and must
stay inside the configured directory. Anything else is a 404, the same
as a missing file, so the response never reveals what exists outside
the root.
"""

import mimetypes
from collections.abc import Awaitable, Callable
from dataclasses import replace
from datetime import UTC
from email.utils import formatdate, parsedate_to_datetime
from pathlib import Path
from typing import TypeAlias

from snippetbox._internal.invoke import invoke
from snippetbox.errors import NotFound
from snippetbox.http.request import Request
from snippetbox.http.response import Response

Handler: TypeAlias = Callable[[Request], Response | Awaitable[Response]]


class FileServer:
    """Handler that serves files from *directory*.

    Only regular files are served: directories (no listing, no index
    file) and missing paths raise ``NotFound``. Responses carry
    ``Content-Type`` (guessed from the extension) and ``Last-Modified``;
    a matching ``If-Modified-Since`` yields ``304 Not Modified``.
    """

    __slots__ = ("_cache_control", "_directory")

    def __init__(self, directory: str | Path, *, cache_control: str | None = None) -> None:
        self._directory = Path(directory).resolve()
        self._cache_control = cache_control

    def __call__(self, request: Request) -> Response:
        file_path = self._resolve(request.path)

        try:
            stat = file_path.stat()
            last_modified = formatdate(stat.st_mtime, usegmt=True)
            if self._not_modified(request, int(stat.st_mtime)):
                return self._with_cache_headers(Response(status=304), last_modified)
            body = file_path.read_bytes()
        except FileNotFoundError as exc:
            # removed after _resolve saw it
            raise NotFound() from exc

        content_type, _ = mimetypes.guess_type(file_path.name)
        if content_type is None:
            content_type = "application/octet-stream"
        elif content_type.startswith("text/") or content_type == "application/javascript":
            content_type = f"{content_type}; charset=utf-8"

        response = Response(body=body, content_type=content_type)
        return self._with_cache_headers(response, last_modified)

    def _resolve(self, path: str) -> Path:
        """Map a URL path to a regular file inside the root, or raise NotFound."""
        relative = path.lstrip("/")
        try:
            file_path = (self._directory / relative).resolve()
        except (OSError, ValueError) as exc:
            # ValueError: embedded NUL byte
            raise NotFound() from exc

        if not file_path.is_relative_to(self._directory):
            raise NotFound()
        if not file_path.is_file():
            raise NotFound()
        return file_path

    @staticmethod
    def _not_modified(request: Request, mtime: int) -> bool:
        header = request.headers.get("if-modified-since")
        if not header:
            return False
        try:
            since = parsedate_to_datetime(header)
        except (TypeError, ValueError):
            return False
        if since.tzinfo is None:
            # "-0000" zone parses naive; the date is still UTC
            since = since.replace(tzinfo=UTC)
        return mtime <= since.timestamp()

    def _with_cache_headers(self, response: Response, last_modified: str) -> Response:
        response = response.with_header("Last-Modified", last_modified)
        if self._cache_control:
            response = response.with_header("Cache-Control", self._cache_control)
        return response


def strip_prefix(prefix: str, handler: Handler) -> Callable[[Request], Awaitable[Response]]:
    """Wrap *handler* so it sees the request path without *prefix*.

    ``strip_prefix("/static", fs)`` turns ``/static/css/main.css`` into
    ``/css/main.css``. Paths outside the prefix raise ``NotFound``.
    """
    prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""

    async def stripped(request: Request) -> Response:
        if not request.path.startswith(prefix):
            raise NotFound()
        rest = request.path[len(prefix) :]
        if rest and not rest.startswith("/"):
            # "/staticfoo" shares the characters but not the segment
            raise NotFound()
        return await invoke(handler, replace(request, path=rest or "/"))

    stripped.__name__ = f"strip_prefix({prefix!r})"
    return stripped
