"""Batch execution logic for sending chunks and reassembling responses.

This module provides the BatchExecutor class that turns an ordered list of
sub-requests into one or more physical ``POST /batch`` requests and joins
their responses back into one list in submission order.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping, Sequence
from time import perf_counter

from ...core.enums import HttpMethod
from ...core.exceptions import PartialBatchError, PreconditionViolationError
from ...models import RequestDescriptor, ResponseEnvelope
from ..endpoints import endpoint
from ..rest.transport import RequestExecutor
from ..settings import ServerSettingsCache
from .definitions import BatchPlan, BatchPolicy, BatchResult
from .planners import BatchPlanner
from .telemetry import log_batch_execution_complete, log_chunk_completed, log_chunk_error


class BatchExecutor:
    """Executes batched sub-requests within the server's per-batch limit.

    Chunks may run with bounded parallelism (``max_concurrency``), but the
    join is ordered: chunk outputs are concatenated in chunk order whatever
    their completion order.

    Failure semantics:
        Once a chunk failure is observed, chunks that have not started yet
        are skipped. Chunks already in flight are not cancelled, and chunks
        that succeeded stay applied on the server. With a single chunk the
        original error propagates unchanged; with several chunks a
        ``PartialBatchError`` reports exactly which sub-requests were applied.
    """

    def __init__(
        self,
        executor: RequestExecutor,
        settings: ServerSettingsCache,
        *,
        max_concurrency: int = 1,
    ) -> None:
        """Initialize batch executor.

        Args:
            executor: Single-request executor used for physical requests
            settings: Cache providing ``batch_max_requests``
            max_concurrency: Maximum physical batch requests in flight
        """
        self._executor = executor
        self._settings = settings
        self._max_concurrency = max_concurrency

    async def execute(
        self,
        requests: Sequence[RequestDescriptor],
        *,
        headers: Mapping[str, str] | None = None,
    ) -> BatchResult:
        """Send ``requests`` and return their responses in the same order.

        Args:
            requests: Ordered sub-requests
            headers: Headers applied to every physical request and sent as
                the batch ``defaults`` for every sub-request

        Returns:
            BatchResult whose ``responses`` pair index-by-index with ``requests``

        Raises:
            TransportError, ServerError: When the only chunk fails
            PartialBatchError: When any chunk of a multi-chunk batch fails
        """
        if not requests:
            return BatchResult(responses=[], chunks_used=0)

        settings = await self._settings.get()
        policy = BatchPolicy(
            max_requests=settings.batch_max_requests,
            max_concurrency=self._max_concurrency,
        )
        plans = BatchPlanner(policy).plan(len(requests))
        defaults = dict(headers or {})
        started = perf_counter()

        if len(plans) == 1:
            responses = await self._send_chunk(requests, plans[0], defaults)
            result = BatchResult(responses=responses, chunks_used=1)
        else:
            result = await self._execute_chunks(requests, plans, defaults, policy)

        log_batch_execution_complete(
            result=result, total_latency_ms=(perf_counter() - started) * 1000.0
        )
        return result

    async def _execute_chunks(
        self,
        requests: Sequence[RequestDescriptor],
        plans: list[BatchPlan],
        headers: dict[str, str],
        policy: BatchPolicy,
    ) -> BatchResult:
        semaphore = asyncio.Semaphore(policy.max_concurrency)
        failures: dict[int, BaseException] = {}
        skipped: list[int] = []

        async def run(plan: BatchPlan) -> list[ResponseEnvelope] | None:
            async with semaphore:
                if failures:
                    skipped.append(plan.chunk_index)
                    return None
                try:
                    return await self._send_chunk(
                        requests[plan.start : plan.stop], plan, headers
                    )
                except Exception as e:
                    failures[plan.chunk_index] = e
                    return None

        chunk_results = await asyncio.gather(*(run(plan) for plan in plans))

        if failures:
            partial: list[ResponseEnvelope | None] = []
            for plan, chunk in zip(plans, chunk_results, strict=True):
                partial.extend(chunk if chunk is not None else [None] * plan.size)
            first_failure = next(iter(failures.values()))
            raise PartialBatchError(
                f"{len(failures)} of {len(plans)} batch chunk(s) failed; "
                f"{sum(r is not None for r in partial)} of {len(requests)} "
                "sub-requests were applied and are not rolled back",
                responses=partial,
                failures=failures,
                skipped_chunks=sorted(skipped),
            ) from first_failure

        responses: list[ResponseEnvelope] = []
        for chunk in chunk_results:
            responses.extend(chunk)
        return BatchResult(responses=responses, chunks_used=len(plans))

    async def _send_chunk(
        self,
        chunk: Sequence[RequestDescriptor],
        plan: BatchPlan,
        headers: dict[str, str],
    ) -> list[ResponseEnvelope]:
        descriptor = RequestDescriptor(
            path=endpoint("batch"),
            method=HttpMethod.POST,
            headers=headers,
            body={
                "defaults": {"headers": headers},
                "requests": [request.to_payload() for request in chunk],
            },
        )

        chunk_start = perf_counter()
        try:
            response = await self._executor.execute(descriptor)
        except Exception as e:
            log_chunk_error(
                chunk_index=plan.chunk_index,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise

        # We only care about the responses
        payload = response.body.get("responses") if isinstance(response.body, dict) else None
        if not isinstance(payload, list) or len(payload) != len(chunk):
            received = len(payload) if isinstance(payload, list) else None
            raise PreconditionViolationError(
                f"Batch chunk {plan.chunk_index} sent {len(chunk)} sub-requests "
                f"but received {received} sub-responses"
            )

        envelopes = [ResponseEnvelope.from_payload(item) for item in payload]
        log_chunk_completed(
            chunk_index=plan.chunk_index,
            responses=len(envelopes),
            latency_ms=(perf_counter() - chunk_start) * 1000.0,
        )
        return envelopes
