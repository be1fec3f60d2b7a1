"""Request line parsing: ``<method> <target> <version>``."""

from reqparse.domain.errors import (
    InvalidPath,
    InvalidVersion,
    MethodMissing,
    PathError,
    PathMissing,
    VersionError,
    VersionMissing,
)
from reqparse.domain.request_types import RequestLine
from reqparse.grammar.method import parse_method
from reqparse.grammar.target import parse_path
from reqparse.grammar.version import parse_version


def parse_request_line(line: str) -> RequestLine:
    """Parse the first request line from its whitespace-separated tokens.

    Tokens are consumed in order, so a bad target is reported even when the
    version token is also missing. Tokens past the third are ignored.
    """
    tokens = iter(line.split())

    method_token = next(tokens, None)
    if method_token is None:
        raise MethodMissing()
    method = parse_method(method_token)

    target = next(tokens, None)
    if target is None:
        raise PathMissing()
    try:
        path = parse_path(target)
    except PathError as exc:
        raise InvalidPath(exc) from exc

    version_token = next(tokens, None)
    if version_token is None:
        raise VersionMissing()
    try:
        version = parse_version(version_token)
    except VersionError as exc:
        raise InvalidVersion(exc) from exc

    return RequestLine(method, path, version)
