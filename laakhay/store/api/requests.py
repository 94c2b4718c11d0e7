"""Request descriptor builders for store resources.

Every builder is a pure function: it takes resource identifiers, a payload
and resolved ``RequestOptions`` and returns an immutable
``RequestDescriptor``. Descriptors can be executed directly or collected in
a batch.

Safe mode:
    With ``options.safe`` set, writes carry concurrency-control headers:
    ``If-Match: "<last_modified>"`` when the known version is available,
    ``If-None-Match: *`` otherwise (the resource must not exist yet).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..core.enums import HttpMethod
from ..core.exceptions import ValidationError
from ..core.options import RequestOptions
from ..models import RequestDescriptor
from ..runtime.endpoints import endpoint
from ..utils.etag import quote

__all__ = [
    "safe_header",
    "create_bucket",
    "create_collection",
    "update_collection",
    "create_record",
    "update_record",
    "delete_record",
]

_DEFAULT_OPTIONS = RequestOptions()


def safe_header(safe: bool, last_modified: int | None = None) -> dict[str, str]:
    """Concurrency-control headers for a write."""
    if not safe:
        return {}
    if last_modified is not None:
        return {"If-Match": quote(last_modified)}
    return {"If-None-Match": "*"}


def _headers(options: RequestOptions, last_modified: int | None = None) -> dict[str, str]:
    return {**options.headers, **safe_header(options.safe, last_modified)}


def create_bucket(name: str, options: RequestOptions = _DEFAULT_OPTIONS) -> RequestDescriptor:
    """Create (PUT) a bucket. ``options.bucket`` is ignored in favor of ``name``."""
    if not name:
        raise ValidationError("A bucket name is required.")
    return RequestDescriptor(
        method=HttpMethod.PUT,
        path=endpoint("bucket", name),
        headers=_headers(options),
        body={"permissions": dict(options.permissions)},
    )


def create_collection(
    options: RequestOptions = _DEFAULT_OPTIONS,
    *,
    id: str | None = None,
    data: Mapping[str, Any] | None = None,
    schema: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Create a collection in ``options.bucket``.

    Without an ``id`` the server generates one (POST on the collections
    endpoint); with an ``id`` the collection is PUT at its own path.
    """
    payload = {**(data or {}), "id": id, "schema": schema}
    return RequestDescriptor(
        method=HttpMethod.PUT if id else HttpMethod.POST,
        path=endpoint("collection", options.bucket, id) if id else endpoint(
            "collections", options.bucket
        ),
        headers=_headers(options),
        body={
            "data": {key: value for key, value in payload.items() if value is not None},
            "permissions": dict(options.permissions),
        },
    )


def update_collection(
    id: str,
    metas: Mapping[str, Any] | None = None,
    options: RequestOptions = _DEFAULT_OPTIONS,
    *,
    schema: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    """Update collection metadata (PATCH when ``options.patch``, else PUT)."""
    if not id:
        raise ValidationError("A collection id is required.")
    metas = dict(metas or {})
    if schema is not None:
        metas["schema"] = schema
    return RequestDescriptor(
        method=HttpMethod.PATCH if options.patch else HttpMethod.PUT,
        path=endpoint("collection", options.bucket, id),
        headers=_headers(options, metas.get("last_modified")),
        body={"data": metas, "permissions": dict(options.permissions)},
    )


def create_record(
    collection: str,
    record: Mapping[str, Any],
    options: RequestOptions = _DEFAULT_OPTIONS,
) -> RequestDescriptor:
    """Create a record; PUT at its own path when it already has an id."""
    record_id = record.get("id")
    return RequestDescriptor(
        method=HttpMethod.PUT if record_id else HttpMethod.POST,
        path=endpoint("record", options.bucket, collection, record_id)
        if record_id
        else endpoint("records", options.bucket, collection),
        headers=_headers(options),
        body={"data": dict(record), "permissions": dict(options.permissions)},
    )


def update_record(
    collection: str,
    record: Mapping[str, Any],
    options: RequestOptions = _DEFAULT_OPTIONS,
) -> RequestDescriptor:
    """Update a record (PATCH when ``options.patch``, else PUT)."""
    record_id = record.get("id")
    if not record_id:
        raise ValidationError("A record id is required.")
    return RequestDescriptor(
        method=HttpMethod.PATCH if options.patch else HttpMethod.PUT,
        path=endpoint("record", options.bucket, collection, record_id),
        headers=_headers(options, record.get("last_modified")),
        body={"data": dict(record), "permissions": dict(options.permissions)},
    )


def delete_record(
    collection: str,
    id: str,
    options: RequestOptions = _DEFAULT_OPTIONS,
) -> RequestDescriptor:
    """Delete a record. Safe deletes require ``options.last_modified``."""
    if not id:
        raise ValidationError("A record id is required.")
    if options.safe and options.last_modified is None:
        raise ValidationError("Safe concurrency check requires a last_modified value.")
    return RequestDescriptor(
        method=HttpMethod.DELETE,
        path=endpoint("record", options.bucket, collection, id),
        headers=_headers(options, options.last_modified),
    )
