"""Command-line entry point.

Registered as ``snippetbox`` in ``pyproject.toml``::

    [project.scripts]
    snippetbox = "snippetbox.cli:main"
"""

import sys

from snippetbox.app import Application
from snippetbox.config import parse_flags
from snippetbox.logger import new_logger
from snippetbox.routes import routes
from snippetbox.server.handler import Mux
from snippetbox.server.runner import serve


def main(argv: list[str] | None = None) -> None:
    """Parse flags, wire the application together, and serve."""
    cfg = parse_flags(argv)
    logger = new_logger(sys.stdout)

    app = Application(logger)
    mux = Mux(routes(app, cfg.static_dir), logger)

    serve(cfg, mux, logger)
