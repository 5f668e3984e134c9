"""In-memory implementation of ScoreIndexStore."""

import time
from collections.abc import Callable
from datetime import timedelta

from cachetools import TLRUCache  # type: ignore[import-untyped]


def _value_expiry(key: str, value: tuple[bytes, float], now: float) -> float:
    """Per-item expiry: each value carries its own TTL in seconds."""
    return now + value[1]


class InMemoryScoreIndexRepository:
    """Single-process score index store.

    Suitable for tests and offline use. Primary-table values live in a
    cachetools TLRUCache so every entry expires on its own TTL, like
    Redis keys. Ordered indexes are plain member -> score dicts sorted
    on read with the Redis tie rule (byte-wise member order).

    Expiry only affects values, never index members, so an expired
    value leaves its member behind exactly as it does on Redis.
    """

    def __init__(
        self,
        maxsize: int = 10_000,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the in-memory store.

        Args:
            maxsize: Maximum number of live values before LRU eviction.
            timer: Clock used for expiry, in seconds.
        """
        self._maxsize = maxsize
        self._values: TLRUCache[str, tuple[bytes, float]] = TLRUCache(
            maxsize=maxsize,
            ttu=_value_expiry,
            timer=timer,
        )
        self._indexes: dict[str, dict[str, float]] = {}

    async def ping(self) -> bool:
        return True

    async def get(self, key: str) -> bytes | None:
        item = self._values.get(key)
        return item[0] if item is not None else None

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        items = [self._values.get(key) for key in keys]
        return [item[0] if item is not None else None for item in items]

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        self._values[key] = (value, ttl.total_seconds())

    async def delete(self, key: str) -> bool:
        # Expired entries count as absent, like Redis DEL
        if self._values.get(key) is None:
            return False
        del self._values[key]
        return True

    async def add_member(self, index: str, member: str, score: float) -> None:
        self._indexes.setdefault(index, {})[member] = score

    async def remove_member(self, index: str, member: str) -> bool:
        members = self._indexes.get(index, {})
        return members.pop(member, None) is not None

    def _sorted_in_range(
        self, index: str, min_score: float, max_score: float
    ) -> list[tuple[str, float]]:
        members = self._indexes.get(index, {})
        matching = [
            (member, score)
            for member, score in members.items()
            if min_score <= score <= max_score
        ]
        matching.sort(key=lambda pair: (pair[1], pair[0].encode("utf-8")))
        return matching

    async def range_by_score(
        self,
        index: str,
        min_score: float,
        max_score: float,
        offset: int,
        limit: int | None,
    ) -> list[tuple[str, float]]:
        matching = self._sorted_in_range(index, min_score, max_score)
        end = None if limit is None else offset + limit
        return matching[offset:end]

    async def count_by_score(self, index: str, min_score: float, max_score: float) -> int:
        return len(self._sorted_in_range(index, min_score, max_score))

    async def cardinality(self, index: str) -> int:
        return len(self._indexes.get(index, {}))

    async def close(self) -> None:
        self._values.clear()
        self._indexes.clear()

    def __len__(self) -> int:
        """Return the number of live values."""
        self._values.expire()
        return len(self._values)

    @property
    def maxsize(self) -> int:
        """Return the maximum number of values."""
        return self._maxsize
