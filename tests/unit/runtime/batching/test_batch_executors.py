"""Unit tests for batch execution logic."""

from __future__ import annotations

import math

import pytest

from laakhay.store.core import (
    PartialBatchError,
    PreconditionViolationError,
    ServerError,
    TransportError,
)
from laakhay.store.models import ResponseEnvelope
from laakhay.store.runtime.batching import BatchExecutor
from laakhay.store.runtime.settings import ServerSettingsCache

LIMIT = 5


def _executor(store, **kwargs) -> BatchExecutor:
    return BatchExecutor(store, ServerSettingsCache(store), **kwargs)


class TestBatchExecutorChunking:
    """Test chunk counts and ordering of BatchExecutor."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("n", [0, 1, LIMIT - 1, LIMIT, LIMIT + 1, 2 * LIMIT, 2 * LIMIT + 7])
    async def test_chunk_count_and_order(self, store_factory, make_requests, n):
        """Test ceil(N/M) physical requests and order-preserving flattening."""
        store = store_factory(batch_max_requests=LIMIT)
        requests = make_requests(n)

        result = await _executor(store).execute(requests)

        assert len(store.batch_calls) == math.ceil(n / LIMIT)
        assert result.chunks_used == math.ceil(n / LIMIT)
        assert [r.path for r in result.responses] == [r.path for r in requests]
        assert [r.body["data"]["index"] for r in result.responses] == list(range(n))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("limit", [None, 0])
    async def test_no_limit_single_request(self, store_factory, make_requests, limit):
        """Test an absent or zero limit sends everything in one request."""
        store = store_factory(batch_max_requests=limit)

        result = await _executor(store).execute(make_requests(57))

        assert len(store.batch_calls) == 1
        assert len(store.batch_calls[0].body["requests"]) == 57
        assert len(result.responses) == 57

    @pytest.mark.asyncio
    async def test_empty_performs_no_io(self, store_factory):
        """Test empty input returns immediately without any request."""
        store = store_factory(batch_max_requests=LIMIT)

        result = await _executor(store).execute([])

        assert result.responses == []
        assert store.calls == []

    @pytest.mark.asyncio
    async def test_physical_request_shape(self, store_factory, make_requests):
        """Test the outer request carries defaults headers and sub-requests."""
        store = store_factory(batch_max_requests=LIMIT)
        requests = make_requests(2)

        await _executor(store).execute(requests, headers={"Authorization": "Basic abc"})

        batch = store.batch_calls[0]
        assert batch.method.value == "POST"
        assert batch.headers == {"Authorization": "Basic abc"}
        assert batch.body["defaults"] == {"headers": {"Authorization": "Basic abc"}}
        assert batch.body["requests"] == [r.to_payload() for r in requests]

    @pytest.mark.asyncio
    async def test_settings_fetched_once(self, store_factory, make_requests):
        """Test settings are fetched once across several batches."""
        store = store_factory(batch_max_requests=LIMIT)
        executor = _executor(store)

        await executor.execute(make_requests(3))
        await executor.execute(make_requests(12))

        assert len(store.root_calls) == 1

    @pytest.mark.asyncio
    async def test_parallel_chunks_join_in_order(self, store_factory, make_requests):
        """Test chunks finishing out of order are still joined in chunk order."""
        # First chunk is slowest, last chunk is fastest
        store = store_factory(
            batch_max_requests=LIMIT, chunk_delays={0: 0.03, 1: 0.02, 2: 0.01}
        )
        requests = make_requests(3 * LIMIT)

        result = await _executor(store, max_concurrency=3).execute(requests)

        assert [r.path for r in result.responses] == [r.path for r in requests]


class TestBatchExecutorFailures:
    """Test failure propagation of BatchExecutor."""

    @pytest.mark.asyncio
    async def test_single_chunk_failure_propagates(self, store_factory, make_requests):
        """Test a failing single batch raises the original error."""
        store = store_factory(batch_max_requests=LIMIT, failing_chunks={0})

        with pytest.raises(ServerError) as exc_info:
            await _executor(store).execute(make_requests(3))

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_sequential_failure_stops_remaining(self, store_factory, make_requests):
        """Test a sequential run skips chunks after the first failure."""
        store = store_factory(batch_max_requests=LIMIT, failing_chunks={1})
        requests = make_requests(3 * LIMIT)

        with pytest.raises(PartialBatchError) as exc_info:
            await _executor(store).execute(requests)

        error = exc_info.value
        assert len(store.batch_calls) == 2
        assert list(error.failures) == [1]
        assert error.skipped_chunks == [2]
        assert error.applied_count == LIMIT
        assert len(error.responses) == len(requests)
        assert all(r is not None for r in error.responses[:LIMIT])
        assert all(r is None for r in error.responses[LIMIT:])
        assert isinstance(error.__cause__, ServerError)

    @pytest.mark.asyncio
    async def test_parallel_failure_keeps_siblings(self, store_factory, make_requests):
        """Test in-flight siblings of a failed chunk complete and are reported."""
        # The failing chunk is slow, so its siblings are already in flight
        store = store_factory(
            batch_max_requests=LIMIT, failing_chunks={0}, chunk_delays={0: 0.02}
        )
        requests = make_requests(2 * LIMIT + 1)

        with pytest.raises(PartialBatchError) as exc_info:
            await _executor(store, max_concurrency=3).execute(requests)

        error = exc_info.value
        assert len(store.batch_calls) == 3
        assert error.skipped_chunks == []
        assert error.responses[:LIMIT] == [None] * LIMIT
        assert [r.path for r in error.responses[LIMIT:]] == [
            r.path for r in requests[LIMIT:]
        ]

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, make_requests):
        """Test transport failures are not wrapped for a single chunk."""

        class BrokenStore:
            async def execute(self, descriptor):
                if descriptor.path == "/":
                    return ResponseEnvelope.build(200, body={"settings": {}})
                raise TransportError("connection refused", url="/batch")

        store = BrokenStore()
        with pytest.raises(TransportError):
            await _executor(store).execute(make_requests(2))

    @pytest.mark.asyncio
    async def test_response_count_mismatch(self, make_requests):
        """Test a batch answer with the wrong number of sub-responses is rejected."""

        class ShortStore:
            async def execute(self, descriptor):
                if descriptor.path == "/":
                    return ResponseEnvelope.build(200, body={"settings": {}})
                return ResponseEnvelope.build(200, body={"responses": [{"status": 200}]})

        with pytest.raises(PreconditionViolationError):
            await _executor(ShortStore()).execute(make_requests(2))
