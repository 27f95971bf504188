"""
Command-line entry point.

Usage:
    python -m botregistry [--debug] [--port 7978] [--file .robot_statuses]

Flags override the corresponding BOTREG_* environment variables.
Exits with status 1 if the listening socket cannot be bound.
"""

import argparse
import logging
import socket
import sys

import uvicorn

from botregistry.config import Settings, settings_from_env
from botregistry.storage import StorageBackend
from botregistry.transport.app import create_app

logger = logging.getLogger("botregistry")


def parse_args(argv: list[str] | None = None, defaults: Settings | None = None) -> Settings:
    """Merge command-line flags over environment settings."""
    settings = defaults or settings_from_env()

    parser = argparse.ArgumentParser(
        prog="botregistry",
        description="Registry server tracking robot names, users, addresses and coordinates",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="print debug info",
    )
    parser.add_argument("--host", default=settings.host, help="address to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="port number")
    parser.add_argument(
        "--file",
        default=None,
        help=f"file to save robot statuses (default: {settings.storage.file_path})",
    )
    args = parser.parse_args(argv)

    settings.debug = args.debug
    settings.host = args.host
    settings.port = args.port
    if args.file is not None:
        settings.storage.file_path = args.file
        settings.storage.backend = StorageBackend.FILE
    return settings


def _bind(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    return sock


def main(argv: list[str] | None = None) -> int:
    settings = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        force=True,
    )

    try:
        sock = _bind(settings.host, settings.port)
    except OSError as e:
        logger.critical(f"Couldn't listen on {settings.host}:{settings.port}: {e}")
        return 1

    logger.info(f"starting server on port {settings.port}")
    config = uvicorn.Config(
        create_app(settings),
        log_level="debug" if settings.debug else "info",
    )
    uvicorn.Server(config).run(sockets=[sock])
    return 0


if __name__ == "__main__":
    sys.exit(main())
