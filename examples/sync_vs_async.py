#!/usr/bin/env python3
"""
Sync and async streams over the same document.

Both flavors walk the tree in the same order; this script checks that and
times a full drain of each.
"""

import asyncio
import sys
import time
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from soupstream import parse
from soupstream import aio, sync


def build_markup(rows: int) -> str:
    cells = "".join(f"<tr><td>{i}</td><td><a href='/r/{i}'>row</a></td></tr>"
                    for i in range(rows))
    return f"<html><body><table>{cells}</table></body></html>"


def sync_drain(doc):
    start = time.perf_counter()
    nodes = sync.descendants(doc).all()
    return nodes, time.perf_counter() - start


async def async_drain(doc):
    start = time.perf_counter()
    nodes = await aio.descendants(doc).all()
    return nodes, time.perf_counter() - start


def main():
    rows = int(sys.argv[1]) if len(sys.argv) > 1 else 2000
    doc = parse(build_markup(rows))

    print("soupstream - Sync vs Async Streams")
    print("=" * 60)

    sync_nodes, sync_time = sync_drain(doc)
    print(f"\n1. Synchronous: {len(sync_nodes):,} nodes in {sync_time:.3f}s")

    async_nodes, async_time = asyncio.run(async_drain(doc))
    print(f"2. Asynchronous: {len(async_nodes):,} nodes in {async_time:.3f}s")

    same = [n.data for n in sync_nodes] == [n.data for n in async_nodes]
    print(f"\nSame document order: {'yes' if same else 'NO'}")
    return 0 if same else 1


if __name__ == "__main__":
    sys.exit(main())
