"""Immutable value objects produced by the request grammar."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union


class StandardMethod(str, Enum):
    """Methods the parser recognises by name."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"

    @property
    def token(self) -> str:
        return self.value


@dataclass(frozen=True)
class ExtensionMethod:
    """Any method token outside the standard set, kept verbatim."""

    token: str


Method = Union[StandardMethod, ExtensionMethod]


@dataclass(frozen=True)
class Query:
    """A single ``name=value`` pair from the query string."""

    name: str
    value: str


@dataclass(frozen=True)
class QueryList:
    """Query pairs in order of appearance."""

    queries: tuple[Query, ...] = ()

    def __iter__(self) -> Iterator[Query]:
        return iter(self.queries)

    def __len__(self) -> int:
        return len(self.queries)


@dataclass(frozen=True)
class Path:
    """Request target split into its path text and query pairs."""

    path: str
    queries: QueryList = field(default_factory=QueryList)


@dataclass(frozen=True)
class Version:
    """Protocol version from an ``HTTP/<major>.<minor>`` token."""

    major: int
    minor: int

    def __str__(self) -> str:
        return f"HTTP/{self.major}.{self.minor}"


@dataclass(frozen=True)
class RequestLine:
    """The decoded first line of a request."""

    method: Method
    path: Path
    version: Version


@dataclass(frozen=True)
class Header:
    """One header field; the name is untrimmed, the value left-trimmed."""

    name: str
    value: str


@dataclass(frozen=True)
class HeaderList:
    """Header fields in order of appearance."""

    headers: tuple[Header, ...] = ()

    def __iter__(self) -> Iterator[Header]:
        return iter(self.headers)

    def __len__(self) -> int:
        return len(self.headers)


@dataclass(frozen=True)
class Request:
    """A fully decoded request."""

    request_line: RequestLine
    headers: HeaderList
    body: str
