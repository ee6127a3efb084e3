"""Snippetbox — a minimal snippet-sharing web application.

Wires a route table, a static file server and a handful of handlers
onto an ASGI server::

    python -m snippetbox -addr :4000

Building the pieces by hand::

    import sys

    from snippetbox import Application, Mux, new_logger
    from snippetbox.routes import routes

    logger = new_logger(sys.stdout)
    app = Application(logger)
    mux = Mux(routes(app, "./ui/static/"), logger)
"""

from snippetbox.app import Application
from snippetbox.config import Config, parse_flags
from snippetbox.errors import (
    ConfigurationError,
    HTTPError,
    MethodNotAllowed,
    NotFound,
    RedirectSlash,
    SnippetboxError,
)
from snippetbox.http import Request, Response
from snippetbox.logger import new_logger
from snippetbox.server.handler import Mux

__version__ = "0.1.0"
__all__ = [
    "Application",
    "Config",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "Mux",
    "NotFound",
    "RedirectSlash",
    "Request",
    "Response",
    "SnippetboxError",
    "new_logger",
    "parse_flags",
]
