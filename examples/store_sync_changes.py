#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio

from laakhay.store.clients import StoreClient
from laakhay.store.core import SyncAnomalyError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Poll a collection for changes")
    p.add_argument("remote", nargs="?", default="http://localhost:8888/v1")
    p.add_argument("bucket", nargs="?", default="default")
    p.add_argument("collection", nargs="?", default="tasks")
    p.add_argument("--auth", default="Basic dXNlcjpwYXNz", help="Authorization header")
    p.add_argument("--interval", type=float, default=5.0, help="Seconds between polls")
    p.add_argument("--polls", type=int, default=6)
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    marker: int | None = None

    async with StoreClient(args.remote, headers={"Authorization": args.auth}) as client:
        for _ in range(args.polls):
            if client.backoff:
                await asyncio.sleep(client.backoff / 1000)
            try:
                result = await client.fetch_changes_since(
                    args.bucket, args.collection, last_modified=marker
                )
            except SyncAnomalyError as e:
                # History was reset remotely: start over with a full fetch
                print(f"Flushed ({e.marker} -> {e.remote_marker}), resyncing")
                marker = None
                continue

            print(f"marker={result.marker} changes={len(result.changes)}")
            for record in result.changes[:5]:
                print(f"  {record.get('id')} last_modified={record.get('last_modified')}")
            marker = result.marker
            await asyncio.sleep(args.interval)


if __name__ == "__main__":
    asyncio.run(main())
