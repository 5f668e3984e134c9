#!/usr/bin/env python3
"""
Demo script for the score-indexed cache.

This script stores a few items with scores in Redis, then reads them
back by key and by score range.
"""

import asyncio
import time

from score_cache import CacheConnectionError, NotFoundError, ScoreIndexedCache
from score_cache.config import configure_logging, settings


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_range_query(cache: ScoreIndexedCache[str]) -> None:
    """Demonstrate set and score range lookups."""
    print_section("Score Range Query")

    items = [
        ("item1", "Value for item 1", 100),
        ("item2", "Value for item 2", 200),
        ("item3", "Value for item 3", 150),
    ]

    print("\n📝 Storing items...")
    for key, value, score in items:
        await cache.set(key, value, score)
        print(f"  ✓ Stored: {key} (score {score})")

    start = time.time()
    found = await cache.get_by_score_range(120, 250, 0, 10)
    duration = (time.time() - start) * 1000

    print(f"\n🔍 Items with score 120-250 ({duration:.2f}ms):")
    for item in found:
        print(f"  Key: {item.key}, Score: {item.score:.1f}, Value: {item.value}")


async def demo_pagination(cache: ScoreIndexedCache[str]) -> None:
    """Demonstrate paging through a range."""
    print_section("Pagination")

    for i in range(10):
        await cache.set(f"page-item-{i}", f"Page value {i}", 1000 + i)

    offset = 0
    page_size = 4
    while True:
        page = await cache.get_by_score_range(1000, 1009, offset, page_size)
        if not page:
            break
        print(f"\n  Page at offset {offset}: {[item.key for item in page]}")
        offset += page_size


async def demo_point_lookup(cache: ScoreIndexedCache[str]) -> None:
    """Demonstrate key lookups, hit and miss."""
    print_section("Point Lookup")

    for key in ["item3", "missing-item"]:
        try:
            value = await cache.get(key)
            print(f"\n  {key}: ✓ HIT - {value}")
        except NotFoundError:
            print(f"\n  {key}: ✗ MISS")


async def main() -> None:
    """Run all demos."""
    configure_logging()

    print("\n🚀 Score Cache Demo")
    print("=" * 70)
    print(f"Redis: {settings.redis_url}, index: {settings.cache_index_name}")

    try:
        cache: ScoreIndexedCache[str] = await ScoreIndexedCache.create(timeout=5.0)
    except CacheConnectionError as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure Redis is running:")
        print("  docker compose up -d")
        print("\nOr set REDIS_URL to your Redis instance.")
        return

    async with cache:
        await demo_range_query(cache)
        await demo_pagination(cache)
        await demo_point_lookup(cache)

        stats = await cache.get_stats()
        print_section("Stats")
        print(f"\n  {stats}")

    print("\n" + "=" * 70)
    print("✅ Demo completed successfully!")
    print("=" * 70)


if __name__ == "__main__":
    asyncio.run(main())
