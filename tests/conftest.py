"""Pytest configuration for score_cache tests."""

import asyncio
from datetime import timedelta

import pytest

from score_cache import InMemoryScoreIndexRepository, ScoreIndexedCache, StoreError


class FakeClock:
    """Manually advanced clock for expiry tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore(InMemoryScoreIndexRepository):
    """In-memory store that fails selected operations on demand.

    fail_methods: store methods that always raise StoreError
    fail_keys: keys whose get() raises StoreError, and whose presence
        fails a whole get_many() batch
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.fail_methods: set[str] = set()
        self.fail_keys: set[str] = set()

    def _maybe_fail(self, method: str) -> None:
        if method in self.fail_methods:
            raise StoreError(f"simulated {method} failure")

    async def ping(self) -> bool:
        self._maybe_fail("ping")
        return await super().ping()

    async def get(self, key: str) -> bytes | None:
        self._maybe_fail("get")
        if key in self.fail_keys:
            raise StoreError(f"simulated get failure for {key}")
        return await super().get(key)

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        self._maybe_fail("get_many")
        failing = self.fail_keys.intersection(keys)
        if failing:
            raise StoreError(f"simulated get_many failure for {sorted(failing)}")
        return await super().get_many(keys)

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        self._maybe_fail("set")
        await super().set(key, value, ttl)

    async def delete(self, key: str) -> bool:
        self._maybe_fail("delete")
        return await super().delete(key)

    async def add_member(self, index: str, member: str, score: float) -> None:
        self._maybe_fail("add_member")
        await super().add_member(index, member, score)

    async def remove_member(self, index: str, member: str) -> bool:
        self._maybe_fail("remove_member")
        return await super().remove_member(index, member)

    async def range_by_score(self, index, min_score, max_score, offset, limit):
        self._maybe_fail("range_by_score")
        return await super().range_by_score(index, min_score, max_score, offset, limit)


class SlowStore(InMemoryScoreIndexRepository):
    """In-memory store whose selected operations stall."""

    def __init__(self, delay: float = 1.0, slow_methods: set[str] | None = None) -> None:
        super().__init__()
        self.delay = delay
        self.slow_methods = slow_methods or set()

    async def _maybe_stall(self, method: str) -> None:
        if method in self.slow_methods:
            await asyncio.sleep(self.delay)

    async def ping(self) -> bool:
        await self._maybe_stall("ping")
        return await super().ping()

    async def get(self, key: str) -> bytes | None:
        await self._maybe_stall("get")
        return await super().get(key)

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        await self._maybe_stall("get_many")
        return await super().get_many(keys)

    async def cardinality(self, index: str) -> int:
        await self._maybe_stall("cardinality")
        return await super().cardinality(index)

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        await self._maybe_stall("set")
        await super().set(key, value, ttl)

    async def add_member(self, index: str, member: str, score: float) -> None:
        await self._maybe_stall("add_member")
        await super().add_member(index, member, score)

    async def range_by_score(self, index, min_score, max_score, offset, limit):
        await self._maybe_stall("range_by_score")
        return await super().range_by_score(index, min_score, max_score, offset, limit)


class CountingStore(InMemoryScoreIndexRepository):
    """In-memory store that records how many value reads overlap."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.in_flight = 0
        self.peak_in_flight = 0
        self.read_calls = 0

    async def _tracked(self, read):
        self.in_flight += 1
        self.read_calls += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            # Yield so concurrently started reads would overlap here
            await asyncio.sleep(0)
            return await read
        finally:
            self.in_flight -= 1

    async def get(self, key: str) -> bytes | None:
        return await self._tracked(super().get(key))

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        return await self._tracked(super().get_many(keys))


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for testing."""
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> FailingStore:
    """Create an in-memory store driven by the fake clock."""
    return FailingStore(timer=clock)


@pytest.fixture
def cache(store: FailingStore) -> ScoreIndexedCache[str]:
    """Create a cache for testing."""
    return ScoreIndexedCache(store=store, index_name="test-index", ttl=60)


@pytest.fixture
def slow_cache():
    """Factory for caches whose store stalls on the named methods."""

    def _make(*slow_methods: str) -> ScoreIndexedCache[str]:
        store = SlowStore(slow_methods=set(slow_methods))
        return ScoreIndexedCache(store=store, index_name="slow", ttl=60)

    return _make


@pytest.fixture
def counting_cache() -> ScoreIndexedCache[str]:
    """Create a cache whose store counts overlapping value reads."""
    return ScoreIndexedCache(store=CountingStore(), index_name="counted", ttl=60)
