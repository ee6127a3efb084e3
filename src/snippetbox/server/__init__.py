"""Server — ASGI dispatch, response sending, and the uvicorn runner."""

from snippetbox.server.handler import Mux, handle_request
from snippetbox.server.runner import listen, serve

__all__ = ["Mux", "handle_request", "listen", "serve"]
