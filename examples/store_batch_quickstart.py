#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.store.clients import StoreClient
from laakhay.store.core import OutcomeCategory, PartialBatchError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Create records through the batch endpoint")
    p.add_argument("remote", nargs="?", default="http://localhost:8888/v1")
    p.add_argument("bucket", nargs="?", default="default")
    p.add_argument("collection", nargs="?", default="tasks")
    p.add_argument("count", nargs="?", type=int, default=60, help="Records to create")
    p.add_argument("--auth", default="Basic dXNlcjpwYXNz", help="Authorization header")
    p.add_argument("--concurrency", type=int, default=1)
    return p.parse_args()


async def main() -> None:
    args = parse_args()

    async with StoreClient(
        args.remote,
        bucket=args.bucket,
        headers={"Authorization": args.auth},
        max_concurrency=args.concurrency,
    ) as client:
        settings = await client.fetch_server_settings()
        print(f"Server batch limit: {settings.batch_max_requests}")

        try:
            result = await client.batch(
                lambda batch: [
                    batch.create_record(args.collection, {"title": f"task #{i}", "done": False})
                    for i in range(args.count)
                ],
                aggregate=True,
            )
        except PartialBatchError as e:
            print(f"Partial failure: {e.applied_count} applied, failures={list(e.failures)}")
            return

        print("=" * 40)
        for category in OutcomeCategory:
            print(f"{category.value:15} : {len(result[category])}")
        print("=" * 40)

        if client.backoff:
            print(f"Server asked to back off for {client.backoff} ms")


if __name__ == "__main__":
    asyncio.run(main())
