"""Endpoint paths of the remote store, relative to the versioned root."""

from __future__ import annotations

from collections.abc import Callable

from ..core.exceptions import ValidationError

_ENDPOINTS: dict[str, Callable[..., str]] = {
    "root": lambda: "/",
    "batch": lambda: "/batch",
    "buckets": lambda: "/buckets",
    "bucket": lambda bucket: f"/buckets/{bucket}",
    "collections": lambda bucket: f"/buckets/{bucket}/collections",
    "collection": lambda bucket, coll: f"/buckets/{bucket}/collections/{coll}",
    "records": lambda bucket, coll: f"/buckets/{bucket}/collections/{coll}/records",
    "record": lambda bucket, coll, record_id: (
        f"/buckets/{bucket}/collections/{coll}/records/{record_id}"
    ),
}


def endpoint(name: str, *args: str) -> str:
    """Build the path of a named endpoint.

    Args:
        name: Endpoint name (root, batch, buckets, bucket, collections,
            collection, records, record)
        *args: Path components, outermost first

    Raises:
        ValidationError: If the endpoint is unknown or arguments are missing
    """
    try:
        build = _ENDPOINTS[name]
    except KeyError:
        raise ValidationError(f"Unknown endpoint: {name}") from None
    try:
        return build(*args)
    except TypeError as e:
        raise ValidationError(f"Invalid arguments for endpoint {name!r}: {args}") from e
