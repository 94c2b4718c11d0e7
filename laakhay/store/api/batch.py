"""Fluent collector of batch sub-requests.

Example:
    >>> builder = BatchBuilder(RequestOptions(bucket="blog"))
    >>> _ = builder.create_collection(id="posts").create_record("posts", {"title": "Hi"})
    >>> len(builder)
    2
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.options import RequestOptions
from ..models import RequestDescriptor
from . import requests as builders


class BatchBuilder:
    """Collects sub-requests in call order.

    Each method accepts per-operation option overrides, merged on top of the
    options the builder was created with.
    """

    def __init__(self, options: RequestOptions | None = None) -> None:
        self._options = options or RequestOptions()
        self._requests: list[RequestDescriptor] = []

    @property
    def options(self) -> RequestOptions:
        return self._options

    @property
    def requests(self) -> tuple[RequestDescriptor, ...]:
        return tuple(self._requests)

    def __len__(self) -> int:
        return len(self._requests)

    def add(self, request: RequestDescriptor) -> BatchBuilder:
        """Append an already-built descriptor."""
        self._requests.append(request)
        return self

    def create_bucket(self, name: str, **options: Any) -> BatchBuilder:
        return self.add(builders.create_bucket(name, self._options.merge(**options)))

    def create_collection(
        self,
        *,
        id: str | None = None,
        data: Mapping[str, Any] | None = None,
        schema: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> BatchBuilder:
        return self.add(
            builders.create_collection(
                self._options.merge(**options), id=id, data=data, schema=schema
            )
        )

    def update_collection(
        self,
        id: str,
        metas: Mapping[str, Any] | None = None,
        *,
        schema: Mapping[str, Any] | None = None,
        **options: Any,
    ) -> BatchBuilder:
        return self.add(
            builders.update_collection(id, metas, self._options.merge(**options), schema=schema)
        )

    def create_record(
        self, collection: str, record: Mapping[str, Any], **options: Any
    ) -> BatchBuilder:
        return self.add(
            builders.create_record(collection, record, self._options.merge(**options))
        )

    def update_record(
        self, collection: str, record: Mapping[str, Any], **options: Any
    ) -> BatchBuilder:
        return self.add(
            builders.update_record(collection, record, self._options.merge(**options))
        )

    def delete_record(self, collection: str, id: str, **options: Any) -> BatchBuilder:
        return self.add(builders.delete_record(collection, id, self._options.merge(**options)))
