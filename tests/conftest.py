"""Shared fixtures: a temporary static tree, a captured JSON logger, and a Mux."""

import io
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from snippetbox.app import Application
from snippetbox.logger import new_logger
from snippetbox.routes import routes
from snippetbox.server.handler import Mux


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create a static tree, plus a file just outside it."""
    static = tmp_path / "static"
    static.mkdir()

    (static / "css").mkdir()
    (static / "css" / "main.css").write_text("body { color: red; }")
    (static / "js").mkdir()
    (static / "js" / "main.js").write_text("console.log('hello');")
    (static / "img").mkdir()
    (static / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (static / "data.bin").write_bytes(b"\x00\x01\x02\x03")

    (tmp_path / "secret.txt").write_text("top secret")
    return static


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def logger(log_stream: io.StringIO) -> logging.Logger:
    return new_logger(log_stream)


@pytest.fixture
def log_records(log_stream: io.StringIO) -> Callable[[], list[dict[str, Any]]]:
    """Return a callable that parses every JSON line written so far."""

    def read() -> list[dict[str, Any]]:
        return [json.loads(line) for line in log_stream.getvalue().splitlines() if line]

    return read


@pytest.fixture
def mux(logger: logging.Logger, static_dir: Path) -> Mux:
    return Mux(routes(Application(logger), static_dir), logger)
