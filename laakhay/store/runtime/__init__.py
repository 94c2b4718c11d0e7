"""Runtime: transport, batching, synchronization and advisory state."""

from .backoff import BackoffTracker
from .batching import (
    AggregatedResult,
    BatchExecutor,
    BatchPlan,
    BatchPlanner,
    BatchPolicy,
    BatchResult,
    StatusMapping,
    aggregate,
)
from .endpoints import endpoint
from .rest import HTTPClient, RequestExecutor, RESTTransport
from .settings import ServerSettingsCache
from .sync import ChangeSyncEngine

__all__ = [
    "AggregatedResult",
    "BackoffTracker",
    "BatchExecutor",
    "BatchPlan",
    "BatchPlanner",
    "BatchPolicy",
    "BatchResult",
    "ChangeSyncEngine",
    "HTTPClient",
    "RESTTransport",
    "RequestExecutor",
    "ServerSettingsCache",
    "StatusMapping",
    "aggregate",
    "endpoint",
]
