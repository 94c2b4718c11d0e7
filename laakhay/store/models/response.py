"""Response envelope returned by the single-request executor."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from multidict import CIMultiDict, CIMultiDictProxy


def _freeze_headers(headers: Mapping[str, str] | None) -> CIMultiDictProxy[str]:
    if isinstance(headers, CIMultiDictProxy):
        return headers
    return CIMultiDictProxy(CIMultiDict(headers or {}))


@dataclass(frozen=True)
class ResponseEnvelope:
    """Status, headers and parsed body of one response.

    Attributes:
        status: HTTP status code
        headers: Read-only, case-insensitive header mapping
        body: Parsed JSON body, or None when there was none
        path: Request path echoed by the batch endpoint (sub-responses only)
    """

    status: int
    headers: CIMultiDictProxy[str] = field(default_factory=lambda: _freeze_headers(None))
    body: Any = None
    path: str | None = None

    @classmethod
    def build(
        cls,
        status: int,
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        path: str | None = None,
    ) -> ResponseEnvelope:
        """Create an envelope from any header mapping."""
        return cls(status=status, headers=_freeze_headers(headers), body=body, path=path)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> ResponseEnvelope:
        """Create an envelope from one entry of a batch ``responses`` array."""
        return cls.build(
            status=int(payload["status"]),
            headers=payload.get("headers"),
            body=payload.get("body"),
            path=payload.get("path"),
        )

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
