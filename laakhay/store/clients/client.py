"""High-level client for a versioned remote record store.

The client wires the runtime pieces together for one remote:

- one ``RESTTransport`` executing single requests
- one ``ServerSettingsCache`` shared by batching and synchronization
- one ``BatchExecutor`` splitting sub-requests within the server limit
- one ``ChangeSyncEngine`` for conditional polling of collections
- one ``BackoffTracker`` subscribed to the transport's events

Example:
    >>> async with StoreClient("https://store.example.com/v1", bucket="blog") as client:
    ...     responses = await client.batch(
    ...         lambda batch: batch.create_record("posts", {"title": "Hello"}),
    ...         safe=True,
    ...     )
    ...     result = await client.fetch_changes_since("blog", "posts", last_modified=None)
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from typing import Any
from urllib.parse import urlencode

from ..api import requests as builders
from ..api.batch import BatchBuilder
from ..core.enums import SUPPORTED_PROTOCOL_VERSION
from ..core.exceptions import InvalidRemoteError, UnsupportedProtocolError
from ..core.options import DEFAULT_BUCKET, RequestOptions
from ..models import ChangesResult, RequestDescriptor, ResponseEnvelope, ServerSettings
from ..runtime.backoff import BackoffTracker
from ..runtime.batching import AggregatedResult, BatchExecutor, StatusMapping
from ..runtime.batching import aggregate as aggregate_responses
from ..runtime.endpoints import endpoint
from ..runtime.rest import HTTPClient, RESTTransport
from ..runtime.settings import ServerSettingsCache
from ..runtime.sync import ChangeSyncEngine

_VERSION_RE = re.compile(r"/(v\d+)/?$")


class StoreClient:
    """Client for buckets, collections and records of one remote."""

    def __init__(
        self,
        remote: str,
        *,
        bucket: str = DEFAULT_BUCKET,
        safe: bool = False,
        headers: Mapping[str, str] | None = None,
        timeout: float = 30.0,
        max_concurrency: int = 1,
        status_mapping: StatusMapping | None = None,
        transport: RESTTransport | None = None,
        http: HTTPClient | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            remote: Remote base URL, including the protocol version
                (e.g. ``https://store.example.com/v1``)
            bucket: Default bucket name
            safe: Add concurrency-control headers to writes by default
            headers: Headers sent with every request
            timeout: Total timeout per HTTP request, in seconds
            max_concurrency: Physical batch requests allowed in flight at once
            status_mapping: Status-to-category mapping used by aggregated batches
            transport: Pre-built transport (default: created for ``remote``).
                Injected transports stay owned by the caller and are not
                closed by ``close()``
            http: Pre-built HTTP client for the default transport, also
                left open by ``close()``
            clock: Millisecond clock for backoff tracking (tests)

        Raises:
            InvalidRemoteError: If ``remote`` is empty or has no version
            UnsupportedProtocolError: If the version is not supported
        """
        self._remote, self._version = self._parse_remote(remote)
        self._defaults = RequestOptions(safe=safe, bucket=bucket, headers=dict(headers or {}))
        self._status_mapping = status_mapping

        self._transport = transport or RESTTransport(self._remote, http=http, timeout=timeout)
        self._owns_transport = transport is None and http is None
        self._settings = ServerSettingsCache(self._transport)
        self._batch = BatchExecutor(
            self._transport, self._settings, max_concurrency=max_concurrency
        )
        self._sync = ChangeSyncEngine(self._transport, self._settings)

        self._backoff = BackoffTracker(clock=clock)
        self._transport.add_listener(self._backoff)

    # ----------------------
    # Configuration
    # ----------------------
    @staticmethod
    def _parse_remote(remote: str) -> tuple[str, str]:
        if not isinstance(remote, str) or not remote:
            raise InvalidRemoteError(f"Invalid remote URL: {remote!r}")
        remote = remote.rstrip("/")
        match = _VERSION_RE.search(remote)
        if match is None:
            raise InvalidRemoteError(f"The remote URL must contain the version: {remote}")
        version = match.group(1)
        if version != SUPPORTED_PROTOCOL_VERSION:
            raise UnsupportedProtocolError(f"Unsupported protocol version: {version}", version)
        return remote, version

    @property
    def remote(self) -> str:
        return self._remote

    @property
    def version(self) -> str:
        return self._version

    @property
    def default_bucket(self) -> str:
        return self._defaults.bucket

    @property
    def default_safe(self) -> bool:
        return self._defaults.safe

    @property
    def option_headers(self) -> dict[str, str]:
        return dict(self._defaults.headers)

    @property
    def transport(self) -> RESTTransport:
        return self._transport

    def request_options(self, **overrides: Any) -> RequestOptions:
        """Client defaults merged with call-site overrides (headers are unioned)."""
        return self._defaults.merge(**overrides)

    # ----------------------
    # Advisory state
    # ----------------------
    @property
    def backoff(self) -> int:
        """Backoff remaining time in milliseconds; 0 when no backoff is ongoing."""
        return self._backoff.remaining_backoff_ms()

    @property
    def backoff_tracker(self) -> BackoffTracker:
        return self._backoff

    # ----------------------
    # Settings, sync and batches
    # ----------------------
    async def fetch_server_settings(self) -> ServerSettings:
        return await self._settings.get()

    async def fetch_changes_since(
        self,
        bucket: str,
        collection: str,
        *,
        last_modified: int | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> ChangesResult:
        """Fetch records of ``bucket/collection`` changed since ``last_modified``.

        Raises:
            SyncAnomalyError: If the remote collection appears to have been flushed
        """
        return await self._sync.fetch_changes_since(
            bucket,
            collection,
            last_modified,
            headers={**self._defaults.headers, **(headers or {})},
        )

    async def run_batch(
        self,
        requests: Sequence[RequestDescriptor],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> list[ResponseEnvelope]:
        """Send sub-requests through the batch endpoint, chunked as needed.

        Returns:
            One response per request, in request order
        """
        result = await self._batch.execute(
            requests, headers={**self._defaults.headers, **(headers or {})}
        )
        return result.responses

    async def batch(
        self,
        build: Callable[[BatchBuilder], Any],
        *,
        aggregate: bool = False,
        **options: Any,
    ) -> list[ResponseEnvelope] | AggregatedResult:
        """Describe operations with a ``BatchBuilder`` and send them as a batch.

        Args:
            build: Callable receiving the builder and adding operations to it
            aggregate: Return an ``AggregatedResult`` instead of raw responses
            **options: Request option overrides (safe, bucket, headers, ...)
        """
        request_options = self.request_options(**options)
        builder = BatchBuilder(request_options)
        build(builder)
        requests = builder.requests
        responses = await self.run_batch(requests, headers=request_options.headers)
        if aggregate:
            return aggregate_responses(responses, requests, self._status_mapping)
        return responses

    async def execute(self, request: RequestDescriptor) -> ResponseEnvelope:
        """Execute one request descriptor."""
        return await self._transport.execute(request)

    # ----------------------
    # Resources
    # ----------------------
    async def create_bucket(self, name: str, **options: Any) -> Any:
        request = builders.create_bucket(name, self.request_options(**options))
        return (await self.execute(request)).body

    async def get_collections(
        self, bucket: str | None = None, *, headers: Mapping[str, str] | None = None
    ) -> list[dict[str, Any]]:
        response = await self.execute(
            RequestDescriptor(
                path=endpoint("collections", bucket or self.default_bucket),
                headers=self.request_options(headers=headers).headers,
            )
        )
        return (response.body or {}).get("data", [])

    async def create_collection(
        self,
        *,
        id: str | None = None,
        data: Mapping[str, Any] | None = None,
        schema: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Any:
        request = builders.create_collection(
            self.request_options(**options), id=id, data=data, schema=schema
        )
        return (await self.execute(request)).body

    async def get_collection(
        self,
        id: str,
        *,
        bucket: str | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        response = await self.execute(
            RequestDescriptor(
                path=endpoint("collection", bucket or self.default_bucket, id),
                headers=self.request_options(headers=headers).headers,
            )
        )
        return response.body

    async def update_collection(
        self,
        id: str,
        metas: Mapping[str, Any] | None = None,
        *,
        schema: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> Any:
        request = builders.update_collection(
            id, metas, self.request_options(**options), schema=schema
        )
        return (await self.execute(request)).body

    async def get_records(
        self,
        collection: str,
        *,
        bucket: str | None = None,
        sort: str = "-last_modified",
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """List records of a collection.

        Records are sorted explicitly (newest first by default) since the
        server does not guarantee any order otherwise.
        """
        path = endpoint("records", bucket or self.default_bucket, collection)
        response = await self.execute(
            RequestDescriptor(
                path=f"{path}?{urlencode({'_sort': sort})}",
                headers=self.request_options(headers=headers).headers,
            )
        )
        return response.body

    async def create_record(
        self, collection: str, record: Mapping[str, Any], **options: Any
    ) -> Any:
        request = builders.create_record(collection, record, self.request_options(**options))
        return (await self.execute(request)).body

    async def update_record(
        self, collection: str, record: Mapping[str, Any], **options: Any
    ) -> Any:
        request = builders.update_record(collection, record, self.request_options(**options))
        return (await self.execute(request)).body

    async def delete_record(self, collection: str, id: str, **options: Any) -> Any:
        request = builders.delete_record(collection, id, self.request_options(**options))
        return (await self.execute(request)).body

    # ----------------------
    # Lifecycle
    # ----------------------
    async def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> StoreClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
