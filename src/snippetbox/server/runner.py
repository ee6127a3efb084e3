"""Server runner — bind the listen address and serve with uvicorn.

The socket is bound here rather than by uvicorn so that every start
failure (bad address, port in use, permission denied) surfaces as one
exception that is logged once before the process exits with status 1.
"""

import logging
import signal
import socket
import sys
from typing import NoReturn

import uvicorn

from snippetbox._internal.asgi import ASGIApp
from snippetbox.config import Config, split_addr

BACKLOG = 2048
SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


def listen(host: str, port: int, *, backlog: int = BACKLOG) -> socket.socket:
    """Bind a listening TCP socket.

    An empty *host* binds every interface, dual-stack where the platform
    supports it. Raises ``OSError`` when the address cannot be bound.
    """
    if not host:
        if socket.has_dualstack_ipv6():
            return socket.create_server(
                ("", port),
                family=socket.AF_INET6,
                backlog=backlog,
                dualstack_ipv6=True,
            )
        return socket.create_server(("", port), backlog=backlog)

    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    return socket.create_server((host, port), family=family, backlog=backlog)


def _fatal(logger: logging.Logger, message: str) -> NoReturn:
    logger.error(message)
    sys.exit(1)


def serve(cfg: Config, app: ASGIApp, logger: logging.Logger) -> None:
    """Serve *app* on ``cfg.addr`` until the process is signalled.

    Logs ``starting server`` with the ``addr`` attribute once the socket
    is bound. Any failure to bind or serve is logged at error level and
    terminates the process with exit status 1.

    SIGINT and SIGTERM stop the server gracefully. uvicorn raises the
    signal again once it has shut down; both reach this function as
    ``KeyboardInterrupt``, which is logged as ``server stopped`` and
    returns normally, so the process exits 0.
    """
    try:
        host, port = split_addr(cfg.addr)
        sock = listen(host, port)
    except (ValueError, OSError) as exc:
        _fatal(logger, str(exc))

    logger.info("starting server", extra={"addr": cfg.addr})

    # uvicorn's own logging config is disabled; records reach stdout only
    # through the JSON logger above.
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            lifespan="on",
            log_config=None,
            access_log=False,
            backlog=BACKLOG,
        )
    )
    # Both shutdown signals raise KeyboardInterrupt, before uvicorn installs
    # its own handlers and when it re-raises the signal on the way out
    previous = {sig: signal.signal(sig, signal.default_int_handler) for sig in SHUTDOWN_SIGNALS}
    try:
        server.run(sockets=[sock])
    except KeyboardInterrupt:
        logger.info("server stopped", extra={"addr": cfg.addr})
        return
    except OSError as exc:
        _fatal(logger, str(exc))
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        sock.close()

    if not server.started:
        _fatal(logger, f"server on {cfg.addr} failed to start")
