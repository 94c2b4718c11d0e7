"""Custom exception hierarchy."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.response import ResponseEnvelope


class StoreError(Exception):
    """Base exception for all library errors."""

    pass


class TransportError(StoreError):
    """Network or connection failure while talking to the remote."""

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class ServerError(StoreError):
    """Remote answered a physical request with an error status (>= 400)."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        url: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body
        self.url = url

    @property
    def errno(self) -> int | None:
        """Server error number, when the body is a JSON error object."""
        if isinstance(self.body, dict):
            return self.body.get("errno")
        return None


class PartialBatchError(StoreError):
    """A chunked batch failed after some of its chunks were applied.

    Chunks that succeeded before (or concurrently with) the failure have
    already been applied server-side and are NOT rolled back. ``responses``
    has one slot per submitted sub-request, in submission order; slots
    belonging to failed or skipped chunks are ``None``.
    """

    def __init__(
        self,
        message: str,
        responses: list[ResponseEnvelope | None],
        failures: dict[int, BaseException],
        skipped_chunks: list[int] | None = None,
    ) -> None:
        super().__init__(message)
        self.responses = responses
        self.failures = failures
        self.skipped_chunks = skipped_chunks or []

    @property
    def applied_count(self) -> int:
        """Number of sub-requests whose chunk was applied by the server."""
        return sum(1 for response in self.responses if response is not None)


class SyncAnomalyError(StoreError):
    """Remote collection history was reset ("server has been flushed").

    Raised when the remote reports a newer marker than the one supplied but
    returns no records to justify it. The incremental delta must not be
    trusted; callers have to perform a full resync.
    """

    def __init__(
        self,
        message: str,
        bucket: str,
        collection: str,
        marker: int | None,
        remote_marker: int | None,
    ) -> None:
        super().__init__(message)
        self.bucket = bucket
        self.collection = collection
        self.marker = marker
        self.remote_marker = remote_marker


class PreconditionViolationError(StoreError):
    """Programming error: responses and requests cannot be paired."""

    pass


class ValidationError(StoreError, ValueError):
    """Invalid arguments supplied when building a request."""

    pass


class InvalidRemoteError(ValidationError):
    """Remote URL is empty or carries no protocol version."""

    pass


class UnsupportedProtocolError(InvalidRemoteError):
    """Remote URL targets a protocol version this client does not speak."""

    def __init__(self, message: str, version: str) -> None:
        super().__init__(message)
        self.version = version
