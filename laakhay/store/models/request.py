"""Request descriptor model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..core.enums import HttpMethod


class RequestDescriptor(BaseModel):
    """One request against the remote store, prior to execution.

    Descriptors are used both as standalone requests and as batch
    sub-requests; ``to_payload`` gives the JSON shape the batch endpoint
    expects.
    """

    path: str = Field(..., min_length=1)
    method: HttpMethod = HttpMethod.GET
    headers: dict[str, str] = Field(default_factory=dict)
    body: Any = None

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        """Accept lower-case method names."""
        if isinstance(v, str):
            return v.upper()
        return v

    def to_payload(self) -> dict[str, Any]:
        """Serialize as a batch sub-request (``body`` omitted when absent)."""
        payload: dict[str, Any] = {
            "path": self.path,
            "method": self.method.value,
            "headers": dict(self.headers),
        }
        if self.body is not None:
            payload["body"] = self.body
        return payload

    model_config = ConfigDict(frozen=True)
