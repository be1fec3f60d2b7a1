"""Top-level request parsing."""

import logging

from reqparse.domain.correlation_id import CorrelationLoggerAdapter
from reqparse.domain.errors import (
    EmptyRequest,
    HeaderListError,
    InvalidHeaders,
    InvalidRequestLine,
    RequestLineError,
)
from reqparse.domain.request_types import Request
from reqparse.grammar.headers import parse_header_list
from reqparse.grammar.lines import split_lines
from reqparse.grammar.request_line import parse_request_line

GRAMMAR_LOGGER = CorrelationLoggerAdapter(logging.getLogger("reqparse.grammar"), {})


def parse_request(text: str) -> Request:
    """Decode a complete request held in ``text``.

    The first line is the request line. Following lines up to the first
    blank line form the header block; the blank line itself is dropped and
    the block may also run to the end of input. Whatever remains is joined
    back with ``\\n`` and kept verbatim as the body.

    Raises a :class:`~reqparse.domain.errors.RequestError` subclass on any
    malformed input; nothing is returned in that case.
    """
    lines = iter(split_lines(text))

    first_line = next(lines, None)
    if first_line is None:
        raise EmptyRequest()

    header_lines = []
    for line in lines:
        if not line:
            break
        header_lines.append(line)
    body = "\n".join(lines)

    try:
        request_line = parse_request_line(first_line)
    except RequestLineError as exc:
        raise InvalidRequestLine(exc) from exc
    try:
        headers = parse_header_list("\n".join(header_lines))
    except HeaderListError as exc:
        raise InvalidHeaders(exc) from exc

    if GRAMMAR_LOGGER.logger.isEnabledFor(logging.DEBUG):
        GRAMMAR_LOGGER.debug(
            "Parsed request",
            extra={
                "event": "request_parsed",
                "method": request_line.method.token,
                "route": request_line.path.path,
                "header_count": len(headers),
                "body_length": len(body),
            },
        )
    return Request(request_line, headers, body)


def parse_request_bytes(data: bytes, encoding: str = "utf-8") -> Request:
    """Decode ``data`` strictly and parse it; decoding errors propagate."""
    return parse_request(data.decode(encoding))
