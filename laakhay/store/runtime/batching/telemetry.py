"""Structured logging for batch operations.

This module provides telemetry hooks for batch execution, emitting
structured logs for observability.
"""

from __future__ import annotations

import logging

from .definitions import BatchResult

logger = logging.getLogger(__name__)


def log_batch_plan(
    *,
    total_requests: int,
    total_chunks: int,
    max_requests: int | None = None,
) -> None:
    """Log batch plan creation.

    Args:
        total_requests: Number of sub-requests to send
        total_chunks: Number of physical batch requests planned
        max_requests: Server limit on sub-requests per batch (None = no limit)
    """
    logger.info(
        "batch_plan_created",
        extra={
            "total_requests": total_requests,
            "total_chunks": total_chunks,
            "max_requests": max_requests,
        },
    )


def log_chunk_completed(
    *,
    chunk_index: int,
    responses: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a single physical batch request.

    Args:
        chunk_index: Zero-based index of the chunk
        responses: Number of sub-responses received
        latency_ms: Latency in milliseconds (optional)
    """
    logger.info(
        "batch_chunk_completed",
        extra={
            "chunk_index": chunk_index,
            "responses": responses,
            "latency_ms": latency_ms,
        },
    )


def log_chunk_error(
    *,
    chunk_index: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed physical batch request.

    Args:
        chunk_index: Zero-based index of the chunk that failed
        error_type: Type of error (e.g., "ServerError", "TransportError")
        error_message: Error message
    """
    logger.error(
        "batch_chunk_error",
        extra={
            "chunk_index": chunk_index,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_batch_execution_complete(
    *,
    result: BatchResult,
    total_latency_ms: float | None = None,
) -> None:
    """Log completion of a batched execution.

    Args:
        result: BatchResult from execution
        total_latency_ms: Total latency in milliseconds (optional)
    """
    logger.info(
        "batch_execution_complete",
        extra={
            "chunks_used": result.chunks_used,
            "total_responses": result.total_responses,
            "total_latency_ms": total_latency_ms,
        },
    )
