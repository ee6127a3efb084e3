"""HTTP primitives — immutable request, response and header types."""

from snippetbox.http.headers import Headers
from snippetbox.http.query import QueryParams
from snippetbox.http.request import Request
from snippetbox.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
