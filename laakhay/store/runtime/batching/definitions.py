"""Batching metadata definitions and policy structures.

This module defines the data structures used to describe how sub-requests
are split into physical batch requests, and what comes back.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ...models import ResponseEnvelope


@dataclass(frozen=True)
class BatchPolicy:
    """Batching policy resolved from server settings and client options.

    Attributes:
        max_requests: Maximum sub-requests per physical batch
            (None or 0 = no limit, everything goes in one batch)
        max_concurrency: Maximum physical batch requests in flight at once
    """

    max_requests: int | None = None
    max_concurrency: int = 1

    def __post_init__(self) -> None:
        """Validate batching policy configuration."""
        if self.max_requests is not None and self.max_requests < 0:
            raise ValueError("BatchPolicy max_requests cannot be negative")
        if self.max_concurrency < 1:
            raise ValueError("BatchPolicy max_concurrency must be at least 1")

    @property
    def limited(self) -> bool:
        return bool(self.max_requests)


@dataclass(frozen=True)
class BatchPlan:
    """Plan for a single physical batch request.

    Attributes:
        start: Index of the first sub-request in the chunk (inclusive)
        stop: Index after the last sub-request in the chunk (exclusive)
        chunk_index: Zero-based index of this chunk in the overall plan
    """

    start: int
    stop: int
    chunk_index: int = 0

    @property
    def size(self) -> int:
        return self.stop - self.start


@dataclass
class BatchResult:
    """Result of a batched execution.

    Attributes:
        responses: Sub-responses in submission order
        chunks_used: Number of physical batch requests issued
    """

    responses: list[ResponseEnvelope] = field(default_factory=list)
    chunks_used: int = 0

    @property
    def total_responses(self) -> int:
        return len(self.responses)
