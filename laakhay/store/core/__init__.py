"""Core components."""

from .enums import (
    SUPPORTED_PROTOCOL_VERSION,
    HttpMethod,
    OutcomeCategory,
    TransportEventType,
)
from .exceptions import (
    InvalidRemoteError,
    PartialBatchError,
    PreconditionViolationError,
    ServerError,
    StoreError,
    SyncAnomalyError,
    TransportError,
    UnsupportedProtocolError,
    ValidationError,
)
from .options import DEFAULT_BUCKET, RequestOptions

__all__ = [
    "SUPPORTED_PROTOCOL_VERSION",
    "DEFAULT_BUCKET",
    "HttpMethod",
    "OutcomeCategory",
    "TransportEventType",
    "RequestOptions",
    "StoreError",
    "TransportError",
    "ServerError",
    "PartialBatchError",
    "SyncAnomalyError",
    "PreconditionViolationError",
    "ValidationError",
    "InvalidRemoteError",
    "UnsupportedProtocolError",
]
