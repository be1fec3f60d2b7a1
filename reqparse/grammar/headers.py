"""Header line and header block parsing."""

from reqparse.domain.errors import HeaderError, HeaderListError, MissingColon
from reqparse.domain.request_types import Header, HeaderList
from reqparse.grammar.lines import split_lines


def parse_header(line: str) -> Header:
    """Split a header line on its first colon.

    The name is kept exactly as written, trailing whitespace included; only
    the leading whitespace of the value is removed.
    """
    name, separator, value = line.partition(":")
    if not separator:
        raise MissingColon()
    return Header(name, value.lstrip())


def parse_header_list(block: str) -> HeaderList:
    """Parse each line of a newline-joined header block."""
    headers = []
    for line_number, line in enumerate(split_lines(block), start=1):
        try:
            headers.append(parse_header(line))
        except HeaderError as exc:
            raise HeaderListError(exc, line_number) from exc
    return HeaderList(tuple(headers))
