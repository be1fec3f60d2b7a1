"""Strict HTTP/1.x request parser: inspection server and one-shot CLI."""

import json
import logging
import signal
import sys
from pathlib import Path
from typing import Optional

from reqparse.bootstrap.config import config_from_args, parse_cli_args
from reqparse.bootstrap.logging_setup import configure_logging
from reqparse.domain.correlation_id import CorrelationLoggerAdapter
from reqparse.domain.errors import RequestParseError
from reqparse.domain.rendering import (
    encoding_error_to_dict,
    error_to_dict,
    request_to_dict,
)
from reqparse.grammar.request import parse_request_bytes
from reqparse.lifecycle.state import ServerLifecycle
from reqparse.transport.accept_loop import run_server
from reqparse.transport.context import WorkerContext

SERVER_LOGGER = CorrelationLoggerAdapter(logging.getLogger("reqparse.server"), {})

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_UNREADABLE = 2


def _read_input(source: str) -> bytes:
    """Return the raw request bytes from a file path, or stdin for ``-``."""
    if source == "-":
        return sys.stdin.buffer.read()
    return Path(source).read_bytes()


def _print_json(payload: dict) -> None:
    print(json.dumps(payload, sort_keys=True))


def parse_once(source: str) -> int:
    """Parse one request from ``source``, print it as JSON, return the exit code.

    Exits with 1 when the request is rejected (bad encoding included) and
    with 2 when the input cannot be read at all.
    """
    try:
        raw = _read_input(source)
    except OSError as error:
        SERVER_LOGGER.error(
            "Cannot read request input",
            extra={
                "event": "input_unreadable",
                "input": source,
                "error_type": type(error).__name__,
            },
        )
        _print_json(
            {
                "error": {
                    "code": "input_unreadable",
                    "message": f"{type(error).__name__}: {error.strerror or error}",
                }
            }
        )
        return EXIT_UNREADABLE

    try:
        request = parse_request_bytes(raw)
    except UnicodeDecodeError as error:
        SERVER_LOGGER.warning(
            "Request is not valid UTF-8",
            extra={"event": "request_undecodable", "input": source},
        )
        _print_json({"error": encoding_error_to_dict(error)})
        return EXIT_REJECTED
    except RequestParseError as error:
        SERVER_LOGGER.warning(
            "Request rejected",
            extra={
                "event": "request_rejected",
                "input": source,
                "failure_path": error.failure_path(),
            },
        )
        _print_json({"error": error_to_dict(error)})
        return EXIT_REJECTED
    _print_json({"request": request_to_dict(request)})
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Serve requests, or parse a single one when ``--input`` is given."""
    args = parse_cli_args(sys.argv[1:] if argv is None else argv)
    destination = args.log_destination
    if args.input is not None and destination.lower() == "stdout":
        # stdout carries the JSON result in one-shot mode
        destination = "stderr"
    configure_logging(args.log_level, destination, args.log_json)

    if args.input is not None:
        return parse_once(args.input)

    config = config_from_args(args)
    lifecycle = ServerLifecycle()

    def shutdown_handler(signum: int, _frame) -> None:
        SERVER_LOGGER.info("Received shutdown signal", extra={"signal": signum})
        lifecycle.begin_draining()

    signal.signal(signal.SIGTERM, shutdown_handler)
    signal.signal(signal.SIGINT, shutdown_handler)

    SERVER_LOGGER.info(
        "Starting request parser server",
        extra={
            "event": "server_starting",
            "host": args.host,
            "port": args.port,
            "log_destination": args.log_destination,
            "log_level": args.log_level,
        },
    )
    run_server(args, WorkerContext(config=config, lifecycle=lifecycle), lifecycle)
    return 0


if __name__ == "__main__":
    sys.exit(main())
