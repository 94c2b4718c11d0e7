"""Advisory tracking of server-requested backoff windows."""

from __future__ import annotations

import math
import time
from collections.abc import Callable

from ..core.enums import TransportEventType
from ..models import TransportEvent


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class BackoffTracker:
    """Remembers until when the server asked not to be contacted.

    The tracker only observes and reports. Nothing in the client waits on it;
    callers read ``remaining_backoff_ms()`` before issuing more requests.

    Instances are callable so they can be registered directly as transport
    event listeners.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or _monotonic_ms
        self._release_at: float | None = None

    def observe(self, duration_ms: int) -> None:
        """Record a backoff directive of ``duration_ms`` from now."""
        if duration_ms <= 0:
            self._release_at = None
            return
        self._release_at = self._clock() + duration_ms

    def remaining_backoff_ms(self) -> int:
        """Milliseconds left before the backoff window ends (0 if none)."""
        if self._release_at is None:
            return 0
        remaining = self._release_at - self._clock()
        if remaining <= 0:
            return 0
        return math.ceil(remaining)

    def __call__(self, event: TransportEvent) -> None:
        if event.event_type is TransportEventType.BACKOFF and event.duration_ms is not None:
            self.observe(event.duration_ms)
