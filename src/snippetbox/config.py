"""Startup configuration.

Config is a frozen dataclass, parsed once from the command line and
never mutated afterwards.
"""

import argparse
from dataclasses import dataclass

DEFAULT_ADDR = ":4000"
DEFAULT_STATIC_DIR = "./ui/static/"


@dataclass(frozen=True, slots=True)
class Config:
    """Process configuration. Immutable after parsing.

    ``addr`` is a ``host:port`` listen address; an empty host means all
    interfaces. ``static_dir`` is resolved relative to the working
    directory.
    """

    addr: str = DEFAULT_ADDR
    static_dir: str = DEFAULT_STATIC_DIR


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snippetbox",
        description="Snippetbox: a minimal snippet-sharing web application.",
    )
    # Single-dash long option, with the double-dash spelling as an alias
    parser.add_argument(
        "-addr",
        "--addr",
        dest="addr",
        default=DEFAULT_ADDR,
        metavar="HOST:PORT",
        help="HTTP network address",
    )
    return parser


def parse_flags(argv: list[str] | None = None) -> Config:
    """Parse command-line flags into a ``Config``.

    Unknown flags or a missing value print usage and exit with status 2,
    which is argparse's own behaviour.
    """
    args = build_parser().parse_args(argv)
    return Config(addr=args.addr)


def split_addr(addr: str) -> tuple[str, int]:
    """Split a ``host:port`` listen address.

    Examples::

        ":4000"          -> ("", 4000)
        "127.0.0.1:8080" -> ("127.0.0.1", 8080)
        "[::1]:4000"     -> ("::1", 4000)

    Raises ``ValueError`` for a missing or invalid port. Port 0 is
    rejected: the server listens on a fixed, advertised address.
    """
    host, sep, port_str = addr.rpartition(":")
    if not sep:
        msg = f"listen tcp {addr}: missing port in address"
        raise ValueError(msg)

    if host.startswith("["):
        if not host.endswith("]"):
            msg = f"listen tcp {addr}: missing ']' in address"
            raise ValueError(msg)
        host = host[1:-1]
    elif ":" in host:
        msg = f"listen tcp {addr}: too many colons in address"
        raise ValueError(msg)

    if not port_str.isdigit():
        msg = f"listen tcp {addr}: invalid port {port_str!r}"
        raise ValueError(msg)

    port = int(port_str)
    if port == 0:
        msg = f"listen tcp {addr}: port 0 is not a fixed listen port"
        raise ValueError(msg)
    if port > 65535:
        msg = f"listen tcp {addr}: port {port} out of range"
        raise ValueError(msg)
    return host, port
