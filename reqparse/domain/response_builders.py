"""HTTP responses written back by the inspection driver."""

import json
from dataclasses import dataclass, field
from typing import Any

from reqparse.domain.errors import RequestParseError
from reqparse.domain.rendering import (
    encoding_error_to_dict,
    error_to_dict,
    request_to_dict,
)
from reqparse.domain.request_types import Request


@dataclass
class HttpResponse:
    """Represents an HTTP response to be sent to a client."""

    status_code: int
    reason: str
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def status_line(self) -> str:
        """Return the HTTP/1.1 status line without its CRLF."""
        return f"HTTP/1.1 {self.status_code} {self.reason}"


def _json_response(status_code: int, reason: str, payload: Any) -> HttpResponse:
    """Build a response whose body is ``payload`` as sorted JSON."""
    body = json.dumps(payload, sort_keys=True).encode()
    return HttpResponse(
        status_code, reason, body, {"Content-Type": "application/json"}
    )


def decoded_response(request: Request) -> HttpResponse:
    """Return 200 with the decoded request as JSON."""
    return _json_response(200, "OK", {"request": request_to_dict(request)})


def parse_error_response(error: RequestParseError) -> HttpResponse:
    """Return 400 describing where the request failed to parse."""
    return _json_response(400, "Bad Request", {"error": error_to_dict(error)})


def undecodable_response(error: UnicodeDecodeError) -> HttpResponse:
    """Return 400 for bytes that are not valid UTF-8."""
    return _json_response(
        400,
        "Bad Request",
        {"error": encoding_error_to_dict(error)},
    )


def entity_too_large_response(limit: int) -> HttpResponse:
    """Return 413 when the request exceeds the configured size."""
    return _json_response(
        413,
        "Payload Too Large",
        {"error": {"code": "request_too_large", "limit": limit}},
    )


def draining_response() -> HttpResponse:
    """Return 503 while the server shuts down."""
    return HttpResponse(503, "Service Unavailable", b"draining")
