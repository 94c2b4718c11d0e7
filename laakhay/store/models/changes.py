"""Result model for incremental change synchronization."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChangesResult(BaseModel):
    """Outcome of one conditional fetch of a collection's records.

    ``marker`` is the collection version after ``changes``; when nothing
    changed it equals the marker that was passed in.
    """

    marker: int | None = None
    changes: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def has_changes(self) -> bool:
        return bool(self.changes)

    model_config = ConfigDict(frozen=True)
