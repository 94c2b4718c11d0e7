"""Per-request option structure and its merge rule.

Client-level defaults and call-site overrides are combined with
``RequestOptions.merge``:

- ``headers`` maps are unioned, call-site values win per key
- every other field is call-site override when given, default otherwise
  (an override of ``None`` means "not given")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any

from .exceptions import ValidationError

DEFAULT_BUCKET = "default"


@dataclass(frozen=True)
class RequestOptions:
    """Options shaping a single request or a whole batch.

    Attributes:
        safe: Add concurrency-control headers (If-Match / If-None-Match)
        bucket: Bucket the request targets
        headers: Extra headers sent with the request
        patch: Use PATCH instead of PUT for updates
        permissions: Permissions object sent along with created resources
        last_modified: Known version of the target, used by safe deletes
    """

    safe: bool = False
    bucket: str = DEFAULT_BUCKET
    headers: Mapping[str, str] = field(default_factory=dict)
    patch: bool = False
    permissions: Mapping[str, list[str]] = field(default_factory=dict)
    last_modified: int | None = None

    def merge(self, **overrides: Any) -> RequestOptions:
        """Return new options with ``overrides`` applied on top of these.

        Raises:
            ValidationError: If an unknown option name is given
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValidationError(f"Unknown request option(s): {', '.join(unknown)}")

        call_headers = overrides.pop("headers", None) or {}
        values = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, headers={**self.headers, **call_headers}, **values)
