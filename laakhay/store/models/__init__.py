"""Data models exchanged with the remote store.

Architecture:
    Pydantic v2 models (frozen) describe what is sent and what the remote
    reports: request descriptors, server settings and sync results. Runtime
    envelopes and events are frozen dataclasses, since they only wrap values
    already validated by the transport.

Model Categories:
    - Requests: RequestDescriptor
    - Responses: ResponseEnvelope
    - Remote state: ServerSettings, ChangesResult
    - Events: TransportEvent
"""

from .changes import ChangesResult
from .events import TransportEvent
from .request import RequestDescriptor
from .response import ResponseEnvelope
from .settings import ServerSettings

__all__ = [
    "ChangesResult",
    "RequestDescriptor",
    "ResponseEnvelope",
    "ServerSettings",
    "TransportEvent",
]
