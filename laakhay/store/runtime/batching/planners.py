"""Batch planning logic for determining chunk boundaries.

This module provides the BatchPlanner class that splits an ordered list of
sub-requests into contiguous index ranges that respect the server limit.
"""

from __future__ import annotations

from .definitions import BatchPlan, BatchPolicy
from .telemetry import log_batch_plan


class BatchPlanner:
    """Plans chunk boundaries for batched sub-requests.

    All boundaries are computed up front, so a request list that exceeds the
    limit by any factor is handled in a single pass with no re-chunking.
    """

    def __init__(self, policy: BatchPolicy) -> None:
        """Initialize batch planner.

        Args:
            policy: Batching policy
        """
        self._policy = policy

    def plan(self, total: int) -> list[BatchPlan]:
        """Plan chunks for ``total`` sub-requests.

        Args:
            total: Number of sub-requests to send

        Returns:
            Ordered, contiguous, non-overlapping chunk plans covering
            ``range(total)``; empty when ``total`` is 0

        Raises:
            ValueError: If total is negative
        """
        if total < 0:
            raise ValueError("Cannot plan batches: total must be non-negative")
        if total == 0:
            return []

        # Fast path: no limit, or everything fits in one physical request
        if not self._policy.limited or total <= self._policy.max_requests:
            plans = [BatchPlan(start=0, stop=total, chunk_index=0)]
        else:
            size = self._policy.max_requests
            plans = [
                BatchPlan(start=start, stop=min(start + size, total), chunk_index=index)
                for index, start in enumerate(range(0, total, size))
            ]

        log_batch_plan(
            total_requests=total,
            total_chunks=len(plans),
            max_requests=self._policy.max_requests,
        )
        return plans
