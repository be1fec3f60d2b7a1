"""Turn raw request bytes into the driver's response."""

import logging

from reqparse.domain.correlation_id import CorrelationLoggerAdapter
from reqparse.domain.errors import RequestParseError
from reqparse.domain.response_builders import (
    HttpResponse,
    decoded_response,
    parse_error_response,
    undecodable_response,
)
from reqparse.grammar.request import parse_request_bytes

INSPECTION_LOGGER = CorrelationLoggerAdapter(
    logging.getLogger("reqparse.pipeline.inspection"), {}
)


def inspect_request(raw: bytes, client: str = "-") -> HttpResponse:
    """Parse ``raw`` and build the response reporting the outcome."""
    try:
        request = parse_request_bytes(raw)
    except UnicodeDecodeError as error:
        INSPECTION_LOGGER.warning(
            "Request is not valid UTF-8",
            extra={"event": "request_undecodable", "client": client},
        )
        return undecodable_response(error)
    except RequestParseError as error:
        INSPECTION_LOGGER.warning(
            "Request rejected",
            extra={
                "event": "request_rejected",
                "client": client,
                "error_code": error.root_cause().code,
                "failure_path": error.failure_path(),
            },
        )
        return parse_error_response(error)

    line = request.request_line
    INSPECTION_LOGGER.info(
        "Request decoded",
        extra={
            "event": "request_decoded",
            "client": client,
            "method": line.method.token,
            "route": line.path.path,
            "version": str(line.version),
            "header_count": len(request.headers),
            "body_length": len(request.body),
        },
    )
    return decoded_response(request)
