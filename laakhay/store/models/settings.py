"""Server settings model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServerSettings(BaseModel):
    """Operational settings reported by the remote root endpoint.

    Only ``batch_max_requests`` is interpreted by the client; every other
    setting is kept as an extra field and reachable through ``get``.
    """

    batch_max_requests: int | None = Field(default=None, ge=0)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up any reported setting by name."""
        if key in type(self).model_fields:
            value = getattr(self, key)
            return default if value is None else value
        return (self.model_extra or {}).get(key, default)

    model_config = ConfigDict(frozen=True, extra="allow")
