"""REST runtime abstractions."""

from .http_client import DEFAULT_HEADERS, EventListener, HTTPClient
from .transport import RequestExecutor, RESTTransport

__all__ = [
    "DEFAULT_HEADERS",
    "EventListener",
    "HTTPClient",
    "RequestExecutor",
    "RESTTransport",
]
