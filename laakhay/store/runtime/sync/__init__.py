"""Change synchronization runtime."""

from .engine import ChangeSyncEngine

__all__ = ["ChangeSyncEngine"]
