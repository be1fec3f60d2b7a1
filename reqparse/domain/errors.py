"""Error taxonomy for the request grammar.

Each parser raises a subclass of the error family that belongs to its own
grammar rule. Callers one level up wrap that error in their own family and
keep the inner error on ``cause`` (and on ``__cause__`` through
``raise ... from``), so the whole failure path can be read off the
outermost exception::

    try:
        parse_request(text)
    except RequestError as error:
        error.failure_path()
        # ('request_line', 'path', 'query_string', 'query_list', 'missing_equals_sign')
"""

from typing import Optional


class RequestParseError(Exception):
    """Base class for every failure raised while decoding a request."""

    code = "parse_error"
    message = "Error parsing http request"

    def __init__(self, cause: Optional[BaseException] = None) -> None:
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"

    def failure_path(self) -> tuple[str, ...]:
        """Return the error codes from this error down to the innermost one."""
        if isinstance(self.cause, RequestParseError):
            return (self.code,) + self.cause.failure_path()
        return (self.code,)

    def root_cause(self) -> "RequestParseError":
        """Return the innermost grammar error in the chain."""
        if isinstance(self.cause, RequestParseError):
            return self.cause.root_cause()
        return self


# ==============================
# query string
# ==============================
class QueryError(RequestParseError):
    code = "query"
    message = "Error parsing http query"


class MissingEqualsSign(QueryError):
    code = "missing_equals_sign"
    message = "Error parsing http query, no '=' in pair"


class QueryListError(RequestParseError):
    """A query pair failed; ``index`` is its zero-based position."""

    code = "query_list"
    message = "Error parsing http query list"

    def __init__(self, cause: QueryError, index: int) -> None:
        self.index = index
        super().__init__(cause)


# ==============================
# path
# ==============================
class PathError(RequestParseError):
    code = "path"
    message = "Error parsing http path"


class NoLeadingSlash(PathError):
    code = "no_leading_slash"
    message = "Error parsing http path, no leading slash"


class InvalidQueryString(PathError):
    code = "query_string"
    message = "Error parsing http path query string"


# ==============================
# version
# ==============================
class VersionError(RequestParseError):
    code = "version"
    message = "Error parsing http version"


class VersionPatternInvalid(VersionError):
    code = "version_pattern"
    message = "Error parsing http version"


class MajorVersionInvalid(VersionError):
    code = "major_version"
    message = "Error parsing major http version"


class MinorVersionInvalid(VersionError):
    code = "minor_version"
    message = "Error parsing minor http version"


# ==============================
# request line
# ==============================
class RequestLineError(RequestParseError):
    code = "request_line"
    message = "Error parsing http request line"


class MethodMissing(RequestLineError):
    code = "method_missing"
    message = "No method"


class PathMissing(RequestLineError):
    code = "path_missing"
    message = "No path"


class VersionMissing(RequestLineError):
    code = "version_missing"
    message = "No version"


class InvalidPath(RequestLineError):
    code = "path"
    message = "Error parsing http request path"


class InvalidVersion(RequestLineError):
    code = "version"
    message = "Error parsing http request version"


# ==============================
# headers
# ==============================
class HeaderError(RequestParseError):
    code = "header"
    message = "Error parsing http header"


class MissingColon(HeaderError):
    code = "missing_colon"
    message = "Error parsing http header, no ':' in line"


class HeaderListError(RequestParseError):
    """A header line failed; ``line_number`` counts from 1 within the block."""

    code = "header_list"
    message = "Error parsing http header list"

    def __init__(self, cause: HeaderError, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(cause)

    def __str__(self) -> str:
        return f"{self.message} (line {self.line_number}): {self.cause}"


# ==============================
# request
# ==============================
class RequestError(RequestParseError):
    code = "request"
    message = "Error parsing http request"


class EmptyRequest(RequestError):
    code = "empty_request"
    message = "Empty request"


class InvalidRequestLine(RequestError):
    code = "request_line"
    message = "Error parsing http request line"


class InvalidHeaders(RequestError):
    code = "headers"
    message = "Error parsing http headers"
