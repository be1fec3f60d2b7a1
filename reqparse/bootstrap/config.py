"""Driver configuration and CLI argument parsing."""

import argparse
import os
from dataclasses import dataclass
from typing import Optional


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value is not None else default


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in {"1", "true", "yes", "on"}


DEFAULT_PORT = _env_int("REQPARSE_PORT", 8000)
DEFAULT_READ_SIZE = _env_int("REQPARSE_READ_SIZE", 4096)
DEFAULT_MAX_REQUEST_BYTES = _env_int("REQPARSE_MAX_REQUEST_BYTES", 64 * 1024)
DEFAULT_SOCKET_TIMEOUT = _env_int("REQPARSE_SOCKET_TIMEOUT", 30)
DEFAULT_SHUTDOWN_GRACE_SECONDS = _env_int("REQPARSE_SHUTDOWN_GRACE_SECONDS", 5)
DEFAULT_LOG_JSON = _env_bool("REQPARSE_LOG_JSON", True)

HEADER_DELIMITERS = (b"\r\n\r\n", b"\n\n")
REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True)
class DriverConfig:
    """Runtime limits used by the accept loop and connection workers."""

    read_size: int = DEFAULT_READ_SIZE
    max_request_bytes: int = DEFAULT_MAX_REQUEST_BYTES
    socket_timeout: int = DEFAULT_SOCKET_TIMEOUT
    shutdown_grace_seconds: int = DEFAULT_SHUTDOWN_GRACE_SECONDS


def _limit_error(read_size: int, max_request_bytes: int) -> Optional[str]:
    """Describe why the read size and request limit cannot work together."""
    if read_size <= 0:
        return "--read-size must be positive"
    if max_request_bytes < read_size:
        return "--max-request-bytes must be at least --read-size"
    return None


def config_from_args(args: argparse.Namespace) -> DriverConfig:
    """Build the driver configuration from parsed CLI arguments."""
    limit_error = _limit_error(args.read_size, args.max_request_bytes)
    if limit_error is not None:
        raise ValueError(limit_error)
    return DriverConfig(
        read_size=args.read_size,
        max_request_bytes=args.max_request_bytes,
        socket_timeout=args.socket_timeout,
        shutdown_grace_seconds=args.shutdown_grace_seconds,
    )


def parse_cli_args(argv: list[str]) -> argparse.Namespace:
    """Return parsed CLI arguments for the parser driver."""
    parser = argparse.ArgumentParser(
        description="Strict HTTP/1.x request parser and inspection server"
    )
    parser.add_argument("--host", default=os.getenv("REQPARSE_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument(
        "--input",
        help="Parse one request from this file ('-' for stdin) and exit",
    )
    default_log_level = os.getenv("REQPARSE_LOG_LEVEL", "INFO").upper()
    default_destination = os.getenv("REQPARSE_LOG_DESTINATION", "stdout")
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
    )
    parser.add_argument(
        "--log-destination",
        default=default_destination,
        help="stdout, stderr or a file path",
    )
    parser.add_argument(
        "--log-json",
        action=argparse.BooleanOptionalAction,
        default=DEFAULT_LOG_JSON,
        help="Emit structured JSON log lines",
    )
    parser.add_argument(
        "--read-size",
        type=int,
        default=DEFAULT_READ_SIZE,
        help="Bytes requested per socket read",
    )
    parser.add_argument(
        "--max-request-bytes",
        type=int,
        default=DEFAULT_MAX_REQUEST_BYTES,
        help="Largest request accepted before answering 413",
    )
    parser.add_argument(
        "--socket-timeout",
        type=int,
        default=DEFAULT_SOCKET_TIMEOUT,
        help="Socket timeout in seconds while reading a request",
    )
    parser.add_argument(
        "--shutdown-grace-seconds",
        type=int,
        default=DEFAULT_SHUTDOWN_GRACE_SECONDS,
        help="Grace period in seconds for graceful shutdown",
    )
    args = parser.parse_args(argv)
    limit_error = _limit_error(args.read_size, args.max_request_bytes)
    if limit_error is not None:
        parser.error(limit_error)
    return args
