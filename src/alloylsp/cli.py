"""Command-line interface for alloylsp."""

from __future__ import annotations

import argparse
import dataclasses
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from alloylsp.logging import configure_logging, get_logger
from alloylsp.lsp.server import SERVER_NAME, SERVER_VERSION, create_server
from alloylsp.schema.defaults import build_default_registry

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4389
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=SERVER_NAME,
        description="Language server for Alloy configuration files",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {SERVER_VERSION}"
    )

    transport = parser.add_argument_group("transport")
    transport.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="How the editor connects (default: stdio)",
    )
    transport.add_argument(
        "--host", default=DEFAULT_HOST, help=f"TCP bind address (default: {DEFAULT_HOST})"
    )
    transport.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"TCP port (default: {DEFAULT_PORT})"
    )

    logs = parser.add_argument_group("logging")
    logs.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Log level, case insensitive (default: INFO, or DEBUG with --debug)",
    )
    logs.add_argument(
        "--log-file", type=Path, help="Write logs to this file instead of stderr"
    )
    logs.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug logging unless --log-level is given",
    )
    return parser


def _resolve_log_level(explicit: str | None, debug: bool) -> str:
    # Explicit --log-level wins over --debug
    if explicit is not None:
        return explicit
    return "DEBUG" if debug else "INFO"


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    ns = _build_parser().parse_args(argv)
    return CliArgs(
        transport=ns.transport,
        host=ns.host,
        port=ns.port,
        log_level=_resolve_log_level(ns.log_level, ns.debug),
        log_file=ns.log_file,
        debug=ns.debug,
    )


def _serve(args: CliArgs, logger: logging.Logger) -> None:
    registry = build_default_registry()
    logger.debug("Loaded %r", registry)

    server = create_server(registry=registry)
    if args.transport == "tcp":
        logger.info("Listening on %s:%d", args.host, args.port)
        server.start_tcp(args.host, args.port)
    else:
        logger.info("Serving over stdio")
        server.start_io()


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the language server until the client disconnects.

    Returns:
        Exit code: 0 on a normal stop or Ctrl-C, 1 on a fatal error.
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")
    logger.info("Starting %s %s", SERVER_NAME, SERVER_VERSION)
    logger.debug("Configuration: %s", args)

    try:
        _serve(args, logger)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1
    return 0
