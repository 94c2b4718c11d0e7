"""Conditional polling of a collection's records.

One call performs one conditional ``GET`` on the records endpoint and
classifies the outcome:

- 304 Not Modified: nothing changed, the input marker is returned as-is
- 200 with records: incremental changes and the new marker
- 200 with a newer marker but no records: the remote history was reset
  (flushed) and the delta cannot be trusted, ``SyncAnomalyError`` is raised
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from urllib.parse import urlencode

from ...core.exceptions import ServerError, SyncAnomalyError, ValidationError
from ...models import ChangesResult, RequestDescriptor
from ...utils.etag import parse_marker, quote
from ..endpoints import endpoint
from ..rest.transport import RequestExecutor
from ..settings import ServerSettingsCache

logger = logging.getLogger(__name__)


class ChangeSyncEngine:
    """Fetches collection changes since a synchronization marker.

    The engine does not store markers: callers own them across calls and pass
    back what the previous call returned.
    """

    def __init__(self, executor: RequestExecutor, settings: ServerSettingsCache) -> None:
        self._executor = executor
        self._settings = settings

    async def fetch_changes_since(
        self,
        bucket: str,
        collection: str,
        marker: int | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> ChangesResult:
        """Fetch records modified since ``marker``.

        Args:
            bucket: Bucket name
            collection: Collection name
            marker: Last known collection version (None for a first sync)
            headers: Extra request headers

        Returns:
            ChangesResult with the new marker and the changed records

        Raises:
            SyncAnomalyError: If the remote appears to have been flushed
            ServerError: If the ETag does not carry a numeric version
            TransportError, ServerError: If the request fails
        """
        # Settings also establish that the remote is reachable and compatible.
        await self._settings.get()

        path = endpoint("records", bucket, collection)
        request_headers = dict(headers or {})
        if marker is not None:
            path = f"{path}?{urlencode({'_since': marker})}"
            request_headers["If-None-Match"] = quote(marker)

        response = await self._executor.execute(
            RequestDescriptor(path=path, headers=request_headers)
        )

        # If HTTP 304, nothing has changed
        if response.status == 304:
            return ChangesResult(marker=marker, changes=[])

        etag = response.headers.get("ETag")
        try:
            remote_marker = parse_marker(etag, fallback=marker)
        except ValidationError as e:
            raise ServerError(
                f"HTTP {response.status}; unusable ETag {etag!r}",
                response.status,
                body=response.body,
                url=path,
            ) from e

        body = response.body if isinstance(response.body, dict) else {}
        records = body.get("data") or []

        server_changed = (
            marker is not None and remote_marker is not None and remote_marker > marker
        )
        if server_changed and not records:
            logger.error(
                "sync_anomaly_detected",
                extra={
                    "bucket": bucket,
                    "collection": collection,
                    "marker": marker,
                    "remote_marker": remote_marker,
                },
            )
            raise SyncAnomalyError(
                f"Server has been flushed: {bucket}/{collection} moved from "
                f"{marker} to {remote_marker} without returning any record",
                bucket=bucket,
                collection=collection,
                marker=marker,
                remote_marker=remote_marker,
            )

        return ChangesResult(marker=remote_marker, changes=records)
