"""Protocol version token parsing."""

import re

from reqparse.domain.errors import (
    MajorVersionInvalid,
    MinorVersionInvalid,
    VersionPatternInvalid,
)
from reqparse.domain.request_types import Version

VERSION_PATTERN = re.compile(r"HTTP/([0-9]+)\.([0-9]+)")
MAX_VERSION_COMPONENT = 255


def _to_component(digits: str) -> int:
    """Convert a digit group into an 8-bit version component."""
    value = int(digits)
    if value > MAX_VERSION_COMPONENT:
        raise ValueError("number too large to fit in target type")
    return value


def parse_version(token: str) -> Version:
    """Parse an ``HTTP/<major>.<minor>`` token, matched case-sensitively."""
    match = VERSION_PATTERN.fullmatch(token)
    if match is None:
        raise VersionPatternInvalid()

    major_digits, minor_digits = match.groups()
    try:
        major = _to_component(major_digits)
    except ValueError as exc:
        raise MajorVersionInvalid(exc) from exc
    try:
        minor = _to_component(minor_digits)
    except ValueError as exc:
        raise MinorVersionInvalid(exc) from exc
    return Version(major, minor)
