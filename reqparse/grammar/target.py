"""Request-target parsing: path text plus the ``&``-separated query pairs."""

from reqparse.domain.errors import (
    InvalidQueryString,
    MissingEqualsSign,
    NoLeadingSlash,
    QueryError,
    QueryListError,
)
from reqparse.domain.request_types import Path, Query, QueryList


def parse_query(fragment: str) -> Query:
    """Split one ``name=value`` fragment on its first ``=``."""
    name, separator, value = fragment.partition("=")
    if not separator:
        raise MissingEqualsSign()
    return Query(name, value)


def parse_query_list(query_string: str) -> QueryList:
    """Parse every ``&``-separated fragment, failing on the first bad one.

    An empty query string is a single empty fragment and therefore an error,
    never an empty list.
    """
    queries = []
    for index, fragment in enumerate(query_string.split("&")):
        try:
            queries.append(parse_query(fragment))
        except QueryError as exc:
            raise QueryListError(exc, index) from exc
    return QueryList(tuple(queries))


def parse_path(target: str) -> Path:
    """Parse a request-target, requiring a leading slash.

    The path text is kept verbatim: no normalisation or percent-decoding.
    """
    if not target.startswith("/"):
        raise NoLeadingSlash()

    path, separator, query_string = target.partition("?")
    if not separator:
        return Path(path)
    try:
        queries = parse_query_list(query_string)
    except QueryListError as exc:
        raise InvalidQueryString(exc) from exc
    return Path(path, queries)
