"""Structured JSON logging on top of the standard ``logging`` package.

``new_logger()`` builds a logger that writes one JSON object per line::

    {"time": "2026-10-19T09:12:03.114+00:00", "level": "INFO",
     "source": {"function": "serve", "file": ".../runner.py", "line": 61},
     "msg": "starting server", "addr": ":4000"}

Attributes passed through ``extra=`` are appended after ``msg``. The
logger is not registered with ``logging.getLogger()``; it is built once
at startup and handed to whatever needs it.
"""

import json
import logging
from datetime import datetime
from typing import Any, TextIO

# Attributes every LogRecord carries; anything else came from ``extra=``
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}

_LEVEL_NAMES = {
    "WARNING": "WARN",
}

# Keys the formatter writes itself; an extra= attribute with one of these
# names is written as "extra.<name>"
_RESERVED_KEYS = frozenset({"time", "level", "source", "msg", "exc"})


class JSONFormatter(logging.Formatter):
    """Format each record as a single-line JSON object.

    Keys, in order: ``time``, ``level``, ``source``, ``msg``, then the
    record's user attributes, then ``exc`` when exception info is set.
    A user attribute that reuses one of these names is written as
    ``extra.<name>`` so it cannot replace the record's own field.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": self.format_time(record),
            "level": _LEVEL_NAMES.get(record.levelname, record.levelname),
            "source": {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            },
            "msg": record.getMessage(),
        }
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRS or key.startswith("_"):
                continue
            if key in _RESERVED_KEYS:
                key = f"extra.{key}"
            payload[key] = value
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)

    @staticmethod
    def format_time(record: logging.LogRecord) -> str:
        """RFC 3339 timestamp with local offset and millisecond precision."""
        created = datetime.fromtimestamp(record.created).astimezone()
        return created.isoformat(timespec="milliseconds")


def new_logger(
    stream: TextIO,
    *,
    level: int = logging.INFO,
    name: str = "snippetbox",
) -> logging.Logger:
    """Build a JSON logger writing to *stream*.

    The logger is instantiated directly rather than through
    ``logging.getLogger()``, so two calls never share handlers.
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JSONFormatter())

    logger = logging.Logger(name, level)
    logger.addHandler(handler)
    logger.propagate = False
    return logger
