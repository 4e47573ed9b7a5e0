"""ETag Codec — weak entity tags carrying the task version.

Invariants:
    - format_weak(v) == 'W/"<v>"' for every version v >= 0
    - parse_weak accepts exactly W/"<digits>" (outer whitespace tolerated)
    - Any other input raises InvalidETagError — never a default version
"""

import re

from taskshare.core.errors import InvalidETagError


_WEAK_ETAG = re.compile(r'^W/"([0-9]+)"$')


def format_weak(version: int) -> str:
    return f'W/"{version}"'


def parse_weak(token: str) -> int:
    """Extract the version from a weak entity tag."""
    match = _WEAK_ETAG.match(token.strip())
    if not match:
        raise InvalidETagError(token)
    return int(match.group(1))


def parse_if_match(header: str | None) -> int | None:
    """Decode an optional If-Match header. Absence stays None for the version check."""
    if header is None:
        return None
    return parse_weak(header)
