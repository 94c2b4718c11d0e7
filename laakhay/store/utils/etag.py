"""Entity-tag quoting helpers.

The remote wraps version tokens in double quotes in ``ETag``, ``If-Match``
and ``If-None-Match`` headers. Markers travel unquoted everywhere else.
Intermediaries that re-encode bodies may weaken tags (``W/"42"``); the
weak prefix is ignored when reading markers.
"""

from __future__ import annotations

from ..core.exceptions import ValidationError

_WEAK_PREFIX = "W/"


def quote(value: int | str) -> str:
    """Wrap a version token in double quotes: ``42`` -> ``'"42"'``."""
    return f'"{value}"'


def unquote(value: str) -> str:
    """Strip a weak prefix and surrounding double quotes, if any.

    ``'"42"'`` -> ``'42'``, ``'W/"42"'`` -> ``'42'``
    """
    if value.startswith(_WEAK_PREFIX):
        value = value[len(_WEAK_PREFIX) :]
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_marker(etag: str | None, fallback: int | None = None) -> int | None:
    """Turn an ``ETag`` header value into a numeric marker.

    Returns ``fallback`` when the header is absent or empty.

    Raises:
        ValidationError: If the tag does not carry a numeric version
    """
    if not etag:
        return fallback
    try:
        return int(unquote(etag.strip()))
    except ValueError as e:
        raise ValidationError(f"ETag is not a numeric version: {etag!r}") from e
