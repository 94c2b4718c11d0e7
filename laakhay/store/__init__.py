"""Laakhay Store - async client for versioned, multi-tenant record stores."""

from .api import BatchBuilder
from .clients import StoreClient
from .core import (
    SUPPORTED_PROTOCOL_VERSION,
    HttpMethod,
    InvalidRemoteError,
    OutcomeCategory,
    PartialBatchError,
    PreconditionViolationError,
    RequestOptions,
    ServerError,
    StoreError,
    SyncAnomalyError,
    TransportError,
    UnsupportedProtocolError,
    ValidationError,
)
from .models import (
    ChangesResult,
    RequestDescriptor,
    ResponseEnvelope,
    ServerSettings,
    TransportEvent,
)
from .runtime import (
    AggregatedResult,
    BackoffTracker,
    BatchExecutor,
    ChangeSyncEngine,
    HTTPClient,
    RESTTransport,
    ServerSettingsCache,
    StatusMapping,
    aggregate,
)

__version__ = "0.1.0"

__all__ = [
    "StoreClient",
    "BatchBuilder",
    "RequestOptions",
    "HttpMethod",
    "OutcomeCategory",
    "SUPPORTED_PROTOCOL_VERSION",
    # Models
    "RequestDescriptor",
    "ResponseEnvelope",
    "ServerSettings",
    "ChangesResult",
    "TransportEvent",
    # Runtime
    "HTTPClient",
    "RESTTransport",
    "ServerSettingsCache",
    "BatchExecutor",
    "ChangeSyncEngine",
    "BackoffTracker",
    "AggregatedResult",
    "StatusMapping",
    "aggregate",
    # Exceptions
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
