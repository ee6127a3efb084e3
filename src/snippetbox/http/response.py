"""HTTP response with a chainable ``.with_*()`` API.

Each transformation returns a new Response; the original is never
modified.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace

TEXT_PLAIN = "text/plain; charset=utf-8"


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls::

        Response("Save a new snippet...").with_status(201)
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = TEXT_PLAIN
    headers: tuple[tuple[str, str], ...] = ()

    def with_status(self, status: int) -> "Response":
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> "Response":
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> "Response":
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> "Response":
        return replace(self, content_type=content_type)

    def header(self, name: str) -> str | None:
        """First value of header *name* (case-insensitive), or ``None``."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return None

    @property
    def body_bytes(self) -> bytes:
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body
