"""Socket input/output for the inspection driver."""

import logging
import socket

from reqparse.bootstrap.config import HEADER_DELIMITERS, REQUEST_ID_HEADER, DriverConfig
from reqparse.domain.correlation_id import CorrelationLoggerAdapter, get_correlation_id
from reqparse.domain.response_builders import HttpResponse

IO_LOGGER = CorrelationLoggerAdapter(logging.getLogger("reqparse.io"), {})


class RequestTooLarge(Exception):
    """Raised when a request grows past the configured byte limit."""


def has_header_delimiter(buffer: bytes) -> bool:
    """Return True once the blank line ending the header block has arrived."""
    return any(delimiter in buffer for delimiter in HEADER_DELIMITERS)


def receive_raw_request(client_socket: socket.socket, config: DriverConfig) -> bytes:
    """Read until the header block is complete or the peer stops sending.

    Whatever arrived alongside the blank line is kept as the body; there is
    no ``Content-Length`` framing. Returns ``b""`` when the peer closed
    without sending anything.
    """
    buffer = b""
    while not has_header_delimiter(buffer):
        chunk = client_socket.recv(config.read_size)
        if not chunk:
            break
        buffer += chunk
        if len(buffer) > config.max_request_bytes:
            raise RequestTooLarge
    IO_LOGGER.debug("Received request bytes", extra={"bytes_in": len(buffer)})
    return buffer


def serialize_response(response: HttpResponse) -> bytes:
    """Encode the response as HTTP/1.1 bytes with framing headers added."""
    headers = dict(response.headers)
    correlation_id = get_correlation_id()
    if correlation_id:
        headers[REQUEST_ID_HEADER] = correlation_id
    headers["Content-Length"] = str(len(response.body))
    headers["Connection"] = "close"
    header_lines = [response.status_line]
    header_lines.extend(f"{name}: {value}" for name, value in headers.items())
    return "\r\n".join(header_lines).encode() + b"\r\n\r\n" + response.body


def send_response(client_socket: socket.socket, response: HttpResponse) -> None:
    """Serialize and send the response; every connection is closed after one."""
    payload = serialize_response(response)
    client_socket.sendall(payload)
    IO_LOGGER.debug(
        "Sent response",
        extra={"status_code": response.status_code, "bytes_out": len(payload)},
    )
