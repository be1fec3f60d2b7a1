"""Plain dictionary views of decoded requests and parse failures."""

from typing import Any

from reqparse.domain.errors import RequestParseError
from reqparse.domain.request_types import ExtensionMethod, Request


def request_to_dict(request: Request) -> dict[str, Any]:
    """Return a JSON-serialisable view of ``request``, preserving order."""
    line = request.request_line
    return {
        "method": line.method.token,
        "extension_method": isinstance(line.method, ExtensionMethod),
        "path": line.path.path,
        "queries": [
            {"name": query.name, "value": query.value} for query in line.path.queries
        ],
        "version": {"major": line.version.major, "minor": line.version.minor},
        "headers": [
            {"name": header.name, "value": header.value} for header in request.headers
        ],
        "body": request.body,
    }


def error_to_dict(error: RequestParseError) -> dict[str, Any]:
    """Describe a parse failure by its code chain and message."""
    return {
        "code": error.root_cause().code,
        "failure_path": list(error.failure_path()),
        "message": str(error),
    }


def encoding_error_to_dict(error: UnicodeDecodeError) -> dict[str, Any]:
    """Describe request bytes that are not valid UTF-8."""
    return {
        "code": "invalid_encoding",
        "message": "Request is not valid UTF-8",
        "position": error.start,
    }
