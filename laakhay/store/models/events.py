"""Typed side-channel events emitted by the HTTP client."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from ..core.enums import TransportEventType


@dataclass(frozen=True)
class TransportEvent:
    """Notification derived from a response's metadata."""

    event_type: TransportEventType
    timestamp: datetime
    duration_ms: int | None = None
    alert: Any = None
    url: str | None = None

    @classmethod
    def backoff(cls, duration_ms: int, url: str | None = None) -> TransportEvent:
        """Server asked clients not to hit it for ``duration_ms`` milliseconds."""
        return cls(
            event_type=TransportEventType.BACKOFF,
            timestamp=datetime.now(UTC),
            duration_ms=duration_ms,
            url=url,
        )

    @classmethod
    def deprecated(cls, alert: Any, url: str | None = None) -> TransportEvent:
        """Server flagged the endpoint or protocol as deprecated."""
        return cls(
            event_type=TransportEventType.DEPRECATED,
            timestamp=datetime.now(UTC),
            alert=alert,
            url=url,
        )
