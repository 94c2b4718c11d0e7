"""Async HTTP client built on aiohttp.

Executes single requests and turns them into ``ResponseEnvelope`` objects:

- status >= 400 raises ``ServerError`` carrying status and parsed body
- connection failures and timeouts raise ``TransportError``
- ``Backoff`` and ``Alert`` response headers are published to registered
  listeners as ``TransportEvent`` messages; the client itself never waits
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import aiohttp

from ...core.exceptions import ServerError, TransportError
from ...models import ResponseEnvelope, TransportEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[TransportEvent], Awaitable[None]] | Callable[[TransportEvent], None]

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class HTTPClient:
    """Async HTTP client wrapper."""

    def __init__(self, base_url: str | None = None, timeout: float = 30.0) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: aiohttp.ClientSession | None = None
        self._listeners: list[EventListener] = []

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def add_listener(self, listener: EventListener) -> None:
        """Register a callback receiving every ``TransportEvent``."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str] | None = None,
        data: str | None = None,
    ) -> ResponseEnvelope:
        """Perform one request.

        Args:
            method: HTTP method
            url: Absolute URL, or a path relative to ``base_url``
            headers: Request headers, merged over the JSON defaults
            data: Already-serialized request body

        Returns:
            Response envelope for any status below 400

        Raises:
            TransportError: On connection failure or timeout
            ServerError: On status >= 400 or an unparseable success body
        """
        if self.base_url and not url.startswith("http"):
            url = f"{self.base_url}{url}"

        merged_headers = {**DEFAULT_HEADERS, **(headers or {})}
        try:
            async with self.session.request(
                method, url, headers=merged_headers, data=data
            ) as response:
                status = response.status
                response_headers = response.headers
                raw = b"" if status == 304 else await response.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(
                "http_request_failed",
                extra={"method": method, "url": url, "error_type": type(e).__name__},
            )
            raise TransportError(
                f"{method} {url} failed: {str(e) or type(e).__name__}", url=url
            ) from e

        await self._publish_events(response_headers, url)
        body = self._parse_body(raw, status, url)

        if status >= 400:
            raise ServerError(self._error_message(status, body), status, body=body, url=url)

        return ResponseEnvelope.build(status=status, headers=response_headers, body=body)

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> HTTPClient:
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()

    @staticmethod
    def _parse_body(raw: bytes, status: int, url: str) -> Any:
        if not raw:
            return None
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as e:
            # UnicodeDecodeError is a ValueError too
            text = raw.decode("utf-8", errors="replace")
            if status >= 400:
                # Error pages from proxies are often plain text or HTML.
                return text
            raise ServerError(
                f"HTTP {status}; invalid JSON response", status, body=text, url=url
            ) from e

    @staticmethod
    def _error_message(status: int, body: Any) -> str:
        message = f"HTTP {status}"
        if isinstance(body, dict):
            error = body.get("error")
            detail = body.get("message")
            if error and detail:
                message += f"; {error}: {detail}"
            elif error or detail:
                message += f"; {error or detail}"
        return message

    async def _publish_events(self, headers: Mapping[str, str], url: str) -> None:
        backoff = headers.get("Backoff")
        if backoff:
            try:
                duration_ms = int(float(backoff) * 1000)
            except (ValueError, OverflowError):
                logger.warning("invalid_backoff_header", extra={"value": backoff, "url": url})
            else:
                logger.info("backoff_requested", extra={"duration_ms": duration_ms, "url": url})
                await self._emit(TransportEvent.backoff(duration_ms, url=url))

        alert = headers.get("Alert")
        if alert:
            try:
                payload: Any = json.loads(alert)
            except ValueError:
                payload = alert
            logger.warning("server_deprecation_alert", extra={"alert": payload, "url": url})
            await self._emit(TransportEvent.deprecated(payload, url=url))

    async def _emit(self, event: TransportEvent) -> None:
        for listener in list(self._listeners):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception(
                    "transport_listener_error", extra={"event_type": event.event_type.value}
                )
