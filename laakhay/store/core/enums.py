"""Core enumerations shared across the client.

Key Types:
    - HttpMethod: Methods accepted in request descriptors and batch sub-requests
    - OutcomeCategory: Caller-facing buckets for batch sub-response statuses
    - TransportEventType: Side-channel notifications emitted by the HTTP client
"""

from enum import Enum

# Currently supported protocol version of the remote API.
SUPPORTED_PROTOCOL_VERSION = "v1"


class HttpMethod(str, Enum):
    """HTTP methods understood by the remote store."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    def __str__(self) -> str:
        return self.value


class OutcomeCategory(str, Enum):
    """Classification of one batch sub-response.

    Every status code maps to exactly one category; see
    ``StatusMapping`` for the default assignment.
    """

    PUBLISHED = "published"
    CREATED = "created"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    CONFLICT = "conflict"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"

    def __str__(self) -> str:
        return self.value


class TransportEventType(Enum):
    """Types of transport side-channel events."""

    BACKOFF = "backoff"
    DEPRECATED = "deprecated"
