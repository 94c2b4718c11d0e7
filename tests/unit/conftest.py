"""Shared fixtures for unit tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import pytest

from laakhay.store.core import ServerError
from laakhay.store.models import RequestDescriptor, ResponseEnvelope


class FakeStore:
    """In-memory stand-in for the remote, implementing ``execute``.

    Answers the root endpoint with settings, the batch endpoint with one
    sub-response per sub-request (echoing the sub-request), and any other
    path with ``responses[path]`` or a 404 ``ServerError``.
    """

    def __init__(
        self,
        batch_max_requests: int | None = None,
        *,
        settings: dict[str, Any] | None = None,
        sub_status: Callable[[dict[str, Any]], int] | None = None,
        failing_chunks: set[int] | None = None,
        chunk_delays: dict[int, float] | None = None,
    ) -> None:
        self.settings = {"batch_max_requests": batch_max_requests, **(settings or {})}
        self.sub_status = sub_status or (lambda sub: 200)
        self.failing_chunks = failing_chunks or set()
        self.chunk_delays = chunk_delays or {}
        self.responses: dict[str, ResponseEnvelope] = {}
        self.calls: list[RequestDescriptor] = []
        self._batch_count = 0

    @property
    def batch_calls(self) -> list[RequestDescriptor]:
        return [call for call in self.calls if call.path == "/batch"]

    @property
    def root_calls(self) -> list[RequestDescriptor]:
        return [call for call in self.calls if call.path == "/"]

    async def execute(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        self.calls.append(descriptor)
        if descriptor.path == "/":
            return ResponseEnvelope.build(200, body={"settings": self.settings})
        if descriptor.path == "/batch":
            return await self._batch(descriptor)
        if descriptor.path in self.responses:
            return self.responses[descriptor.path]
        raise ServerError("HTTP 404", 404, body={"errno": 111}, url=descriptor.path)

    async def _batch(self, descriptor: RequestDescriptor) -> ResponseEnvelope:
        chunk_index = self._batch_count
        self._batch_count += 1
        delay = self.chunk_delays.get(chunk_index)
        if delay:
            await asyncio.sleep(delay)
        if chunk_index in self.failing_chunks:
            raise ServerError("HTTP 503", 503, body={"errno": 201}, url="/batch")
        return ResponseEnvelope.build(
            200,
            body={
                "responses": [
                    {
                        "status": self.sub_status(sub),
                        "path": sub["path"],
                        "headers": {"ETag": '"1"'},
                        "body": {"data": (sub.get("body") or {}).get("data")},
                    }
                    for sub in descriptor.body["requests"]
                ]
            },
        )


@pytest.fixture
def store_factory() -> type[FakeStore]:
    """Factory for in-memory fake remotes."""
    return FakeStore


@pytest.fixture
def make_requests() -> Callable[[int], list[RequestDescriptor]]:
    """Build ``n`` distinct record-creation sub-requests."""

    def _make(n: int) -> list[RequestDescriptor]:
        return [
            RequestDescriptor(
                path=f"/buckets/b/collections/c/records/r{i}",
                method="PUT",
                body={"data": {"id": f"r{i}", "index": i}},
            )
            for i in range(n)
        ]

    return _make
