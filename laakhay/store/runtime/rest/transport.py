"""Single-request executor: descriptor in, envelope out."""

from __future__ import annotations

import json
from typing import Protocol

from ...models import RequestDescriptor, ResponseEnvelope
from .http_client import EventListener, HTTPClient


class RequestExecutor(Protocol):
    """Anything able to run one ``RequestDescriptor``.

    Implementations must serialize ``descriptor.body`` to JSON and surface
    non-2xx statuses and transport failures as exceptions, never as an
    envelope.
    """

    async def execute(self, descriptor: RequestDescriptor) -> ResponseEnvelope: ...


class RESTTransport:
    """Executes request descriptors against a remote base URL."""

    def __init__(
        self,
        base_url: str,
        *,
        http: HTTPClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._http = http or HTTPClient(timeout=timeout)

    @property
    def http(self) -> HTTPClient:
        return self._http

    def add_listener(self, listener: EventListener) -> None:
        self._http.add_listener(listener)

    async def execute(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        body = None if descriptor.body is None else json.dumps(descriptor.body)
        return await self._http.request(
            descriptor.method.value,
            f"{self.base_url}{descriptor.path}",
            headers=descriptor.headers,
            data=body,
        )

    async def close(self) -> None:
        await self._http.close()
