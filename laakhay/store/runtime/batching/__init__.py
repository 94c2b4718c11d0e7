"""Batching layer for the remote batch endpoint.

Architecture:
    The batching layer consists of:
    - definitions.py: Batch metadata structures (BatchPolicy, BatchPlan, BatchResult)
    - planners.py: Chunk planning logic (index ranges within the server limit)
    - executors.py: Chunk execution logic (physical requests, ordered join)
    - aggregation.py: Sub-response classification (StatusMapping, aggregate)
    - telemetry.py: Structured logging

Usage:
    The server limit comes from ``batch_max_requests`` in the server settings;
    callers hand an ordered list of sub-requests to ``BatchExecutor`` and get
    the responses back in the same order, however many physical requests
    were needed.
"""

from __future__ import annotations

from .aggregation import (
    DEFAULT_STATUS_MAPPING,
    AggregatedResult,
    ResultPair,
    StatusMapping,
    aggregate,
)
from .definitions import BatchPlan, BatchPolicy, BatchResult
from .executors import BatchExecutor
from .planners import BatchPlanner

__all__ = [
    "BatchPolicy",
    "BatchPlan",
    "BatchResult",
    "BatchPlanner",
    "BatchExecutor",
    "AggregatedResult",
    "ResultPair",
    "StatusMapping",
    "DEFAULT_STATUS_MAPPING",
    "aggregate",
]
