"""Memoized access to the remote's operational settings."""

from __future__ import annotations

import logging

from ..models import RequestDescriptor, ServerSettings
from .endpoints import endpoint
from .rest.transport import RequestExecutor

logger = logging.getLogger(__name__)


class ServerSettingsCache:
    """Fetches server settings once and keeps them for the owner's lifetime.

    There is no invalidation and no lock: two callers racing on the first
    fetch both hit the root endpoint and the last write wins, which is
    harmless since both read the same values.
    """

    def __init__(self, executor: RequestExecutor) -> None:
        self._executor = executor
        self._settings: ServerSettings | None = None

    @property
    def cached(self) -> ServerSettings | None:
        return self._settings

    async def get(self) -> ServerSettings:
        """Return cached settings, fetching them from the root endpoint once."""
        if self._settings is not None:
            return self._settings

        response = await self._executor.execute(RequestDescriptor(path=endpoint("root")))
        payload = response.body.get("settings") if isinstance(response.body, dict) else None
        settings = ServerSettings.model_validate(payload or {})
        logger.debug(
            "server_settings_fetched",
            extra={"batch_max_requests": settings.batch_max_requests},
        )
        self._settings = settings
        return settings
