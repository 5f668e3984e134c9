"""Score-indexed cache: the core service.

Every entry lives in two places on the same store:
- the ordered index (member -> score), used for range queries
- the primary table (key -> encoded value), with a TTL

The key and the index member are the same string. The two writes are
not transactional: the index is written first, then the value. An
index member whose value has expired (or whose value write failed) is
an accepted state; range queries silently skip it.
"""

import asyncio
import logging
from collections.abc import Awaitable
from datetime import timedelta
from typing import Any, Generic, TypeVar

from score_cache.codecs import TextCodec
from score_cache.config import settings
from score_cache.entities import CacheItem, ScoreRange, check_score
from score_cache.errors import (
    CacheConnectionError,
    ClosedError,
    EncodingError,
    IndexWriteError,
    NotFoundError,
    StoreError,
    ValidationError,
    ValueWriteError,
)
from score_cache.protocols import ScoreIndexStore, ValueCodec
from score_cache.repositories import RedisScoreIndexRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Members looked up per primary-table round trip during a range query
LOOKUP_BATCH_SIZE = 100


class ScoreIndexedCache(Generic[T]):
    """Cache whose entries can be looked up by key or by score range.

    This service depends on PROTOCOLS, not concrete implementations:
    - ScoreIndexStore: Redis, in-memory, etc.
    - ValueCodec: how values become bytes (text by default)

    Every public operation is a coroutine and takes an optional
    ``timeout`` (seconds), the deadline for that call. Nothing is
    retried; failures surface to the caller as typed errors.

    Example:
        ```python
        from score_cache.services import ScoreIndexedCache

        # Connect to Redis with settings defaults
        cache = await ScoreIndexedCache.create()

        await cache.set("item1", "Value for item 1", 100)
        items = await cache.get_by_score_range(50, 150)
        await cache.close()

        # Or with an explicit store
        cache = ScoreIndexedCache(store=InMemoryScoreIndexRepository())
        ```
    """

    def __init__(
        self,
        store: ScoreIndexStore,
        index_name: str | None = None,
        ttl: timedelta | int | float | None = None,
        codec: ValueCodec[T] | None = None,
    ) -> None:
        """Initialize the cache around an existing store.

        No network I/O happens here; use ``create`` to connect and
        verify liveness.

        Args:
            store: Score index store backend (required).
            index_name: Ordered index name. Defaults to settings.
            ttl: Default TTL for writes (timedelta or seconds). Defaults to settings.
            codec: Value codec. Defaults to TextCodec.
        """
        self._store = store
        self._index_name = index_name if index_name is not None else settings.cache_index_name
        self._ttl = self._check_ttl(ttl if ttl is not None else settings.cache_ttl)
        self._codec: ValueCodec[Any] = codec or TextCodec()
        self._closed = False

        if not isinstance(self._index_name, str) or not self._index_name:
            raise ValidationError("index_name must be a non-empty string")
        try:
            self._index_name.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(f"index_name is not valid UTF-8 text: {self._index_name!r}") from e

    @classmethod
    async def create(
        cls,
        address: str | None = None,
        url: str | None = None,
        password: str | None = None,
        db: int | None = None,
        index_name: str | None = None,
        ttl: timedelta | int | float | None = None,
        codec: ValueCodec[T] | None = None,
        timeout: float | None = None,
    ) -> "ScoreIndexedCache[T]":
        """Factory method: connect to Redis and verify it answers a PING.

        Args:
            address: Store address as ``host:port``. Takes precedence over url.
            url: Redis URL. If neither is given, uses settings.
            password: Credential. If None, uses settings (empty means no auth).
            db: Database selector. If None, uses settings.
            index_name: Ordered index name. If None, uses settings.
            ttl: Default TTL for writes. If None, uses settings.
            codec: Value codec. If None, uses TextCodec.
            timeout: Deadline for the liveness check, in seconds.

        Returns:
            A connected ScoreIndexedCache

        Raises:
            CacheConnectionError: If the store is unreachable or rejects auth.
            ValidationError: Bad ttl or index_name; the client is closed first.
        """
        if address:
            url = f"redis://{address}"
        store = RedisScoreIndexRepository.create(url=url, password=password, db=db)
        try:
            cache = cls(store=store, index_name=index_name, ttl=ttl, codec=codec)
        except ValidationError:
            await store.close()
            raise

        try:
            alive = await cache._call(store.ping(), timeout)
        except StoreError as e:
            await store.close()
            raise CacheConnectionError(f"Cannot reach store: {e}") from e
        if not alive:
            await store.close()
            raise CacheConnectionError("Store did not answer PING")

        logger.info("Connected score cache %r (ttl=%ss)", cache.index_name, cache.ttl.total_seconds())
        return cache

    @staticmethod
    def _check_ttl(ttl: timedelta | int | float) -> timedelta:
        if not isinstance(ttl, timedelta):
            if isinstance(ttl, bool) or not isinstance(ttl, (int, float)):
                raise ValidationError(f"ttl must be a timedelta or seconds, got {type(ttl).__name__}")
            ttl = timedelta(seconds=ttl)
        if ttl < timedelta(milliseconds=1):
            raise ValidationError(f"ttl must be at least 1ms, got {ttl}")
        return ttl

    @staticmethod
    def _check_key(key: object) -> str:
        if not isinstance(key, str) or not key:
            raise ValidationError("key must be a non-empty string", key=key if isinstance(key, str) else None)
        # Keys go on the wire as UTF-8; lone surrogates cannot
        try:
            key.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ValidationError(f"key is not valid UTF-8 text: {key!r}") from e
        return key

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClosedError(f"Cache {self._index_name!r} is closed")

    @staticmethod
    async def _call(awaitable: Awaitable[R], timeout: float | None) -> R:
        """Await a store call under an optional deadline.

        A missed deadline cancels the store call and becomes StoreError.
        """
        try:
            return await asyncio.wait_for(awaitable, timeout)
        except asyncio.TimeoutError as e:
            raise StoreError(f"Store call timed out after {timeout}s") from e

    async def set(
        self,
        key: str,
        value: T,
        score: float,
        *,
        ttl: timedelta | int | float | None = None,
        timeout: float | None = None,
    ) -> None:
        """Store a value under key and index it by score.

        Two steps, in order:
        1. Upsert (key, score) into the ordered index
        2. Write key -> value with the TTL

        Args:
            key: Primary key and index member
            value: Payload, must be encodable by the codec
            score: Finite number the entry is ordered by
            ttl: Override the default TTL for this write
            timeout: Deadline for each of the two store calls

        Raises:
            ValidationError: Empty key, or score not a finite number.
            EncodingError: Value not representable by the codec.
            IndexWriteError: Step 1 failed; nothing was written.
            ValueWriteError: Step 2 failed; the index entry remains.
        """
        self._ensure_open()
        key = self._check_key(key)
        score = check_score(score)
        data = self._codec.encode(value)
        effective_ttl = self._check_ttl(ttl) if ttl is not None else self._ttl

        try:
            await self._call(self._store.add_member(self._index_name, key, score), timeout)
        except StoreError as e:
            raise IndexWriteError(f"Failed to index {key!r}: {e}", key=key) from e

        try:
            await self._call(self._store.set(key, data, effective_ttl), timeout)
        except StoreError as e:
            raise ValueWriteError(f"Failed to write value for {key!r}: {e}", key=key) from e

        logger.debug("Set %r score=%s in %r", key, score, self._index_name)

    async def get(self, key: str, *, timeout: float | None = None) -> T:
        """Point lookup in the primary table.

        Does not consult the ordered index.

        Args:
            key: The key to read
            timeout: Deadline for the store call

        Returns:
            The decoded value

        Raises:
            NotFoundError: Key expired or was never written.
            StoreError: Transport failure or timeout.
            EncodingError: Stored bytes cannot be decoded.
        """
        self._ensure_open()
        key = self._check_key(key)
        return await self._lookup(key, timeout)

    async def _lookup(self, key: str, timeout: float | None = None) -> T:
        try:
            data = await self._call(self._store.get(key), timeout)
        except StoreError as e:
            raise StoreError(f"Failed to read {key!r}: {e}", key=key) from e
        if data is None:
            raise NotFoundError(f"No cached value for {key!r}", key=key)
        try:
            return self._codec.decode(data)
        except EncodingError as e:
            raise EncodingError(f"Cannot decode value for {key!r}: {e}", key=key) from e

    async def get_by_score_range(
        self,
        min_score: float,
        max_score: float,
        offset: int = 0,
        limit: int | None = 10,
        *,
        timeout: float | None = None,
    ) -> list[CacheItem[T]]:
        """Return cached items whose score is in [min_score, max_score].

        The pagination window (offset, limit) is applied by the store on
        the index, then member values are fetched in batches of
        LOOKUP_BATCH_SIZE, one round trip at a time. Members whose value
        is missing or unreadable are dropped, as are all members of a
        batch whose round trip failed, so the result may be shorter than
        limit.

        Args:
            min_score: Lower bound (inclusive)
            max_score: Upper bound (inclusive)
            offset: Matching index entries to skip
            limit: Maximum entries; 0 returns nothing, None means no cap
            timeout: Deadline for the whole query, lookups included

        Returns:
            CacheItems ascending by score, ties by key

        Raises:
            ValidationError: Bad bounds or window.
            StoreError: The index scan failed or the deadline passed.
        """
        self._ensure_open()
        window = ScoreRange(min_score, max_score, offset, limit)
        if window.is_empty_window:
            return []

        return await self._call(self._range_with_values(window), timeout)

    async def _range_with_values(self, window: ScoreRange) -> list[CacheItem[T]]:
        members = await self._store.range_by_score(
            self._index_name,
            window.min_score,
            window.max_score,
            window.offset,
            window.limit,
        )

        items: list[CacheItem[T]] = []
        for start in range(0, len(members), LOOKUP_BATCH_SIZE):
            batch = members[start : start + LOOKUP_BATCH_SIZE]
            try:
                values = await self._store.get_many([member for member, _ in batch])
            except StoreError as e:
                logger.warning("Dropping %d members from range: %s", len(batch), e)
                continue

            for (member, score), data in zip(batch, values):
                if data is None:
                    logger.debug("Dropping %r from range: value expired", member)
                    continue
                try:
                    value = self._codec.decode(data)
                except EncodingError as e:
                    logger.warning("Dropping %r from range: %s", member, e)
                    continue
                items.append(CacheItem(key=member, score=score, value=value))

        logger.debug(
            "Range [%s, %s] offset=%s limit=%s: %d indexed, %d returned",
            window.min_score,
            window.max_score,
            window.offset,
            window.limit,
            len(members),
            len(items),
        )
        return items

    async def delete(self, key: str, *, timeout: float | None = None) -> bool:
        """Remove an entry from the index and the primary table.

        Args:
            key: The key to delete
            timeout: Deadline for each of the two store calls

        Returns:
            True if either structure held the key

        Raises:
            IndexWriteError: Removing the index member failed.
            ValueWriteError: Deleting the value failed; the member is already gone.
        """
        self._ensure_open()
        key = self._check_key(key)

        try:
            removed_member = await self._call(self._store.remove_member(self._index_name, key), timeout)
        except StoreError as e:
            raise IndexWriteError(f"Failed to unindex {key!r}: {e}", key=key) from e

        try:
            removed_value = await self._call(self._store.delete(key), timeout)
        except StoreError as e:
            raise ValueWriteError(f"Failed to delete value for {key!r}: {e}", key=key) from e

        return removed_member or removed_value

    async def count_by_score(
        self,
        min_score: float,
        max_score: float,
        *,
        timeout: float | None = None,
    ) -> int:
        """Count index members with a score in [min_score, max_score].

        Counts the index only, so entries whose value expired are
        included.
        """
        self._ensure_open()
        window = ScoreRange(min_score, max_score, limit=None)
        return await self._call(
            self._store.count_by_score(self._index_name, window.min_score, window.max_score),
            timeout,
        )

    async def health_check(self, *, timeout: float | None = None) -> bool:
        """Check if the store is reachable.

        Args:
            timeout: Deadline for the PING; missing it counts as unhealthy

        Returns:
            True if healthy, False otherwise (including when closed)
        """
        if self._closed:
            return False
        try:
            return await self._call(self._store.ping(), timeout)
        except StoreError:
            return False

    async def get_stats(self, *, timeout: float | None = None) -> dict[str, Any]:
        """Get cache statistics.

        Args:
            timeout: Deadline for the member count

        Returns:
            Dictionary with index name, member count and TTL

        Raises:
            StoreError: The count failed or the deadline passed.
        """
        self._ensure_open()
        indexed_members = await self._call(self._store.cardinality(self._index_name), timeout)
        return {
            "index_name": self._index_name,
            "indexed_members": indexed_members,
            "ttl_seconds": self._ttl.total_seconds(),
        }

    async def close(self) -> None:
        """Release the store connection. Closing twice is a no-op."""
        if self._closed:
            return
        self._closed = True
        await self._store.close()
        logger.info("Closed score cache %r", self._index_name)

    async def __aenter__(self) -> "ScoreIndexedCache[T]":
        self._ensure_open()
        return self

    async def __aexit__(self, exc_type: type, exc_val: Exception, exc_tb: object) -> None:
        await self.close()

    @property
    def index_name(self) -> str:
        """Get the ordered index name."""
        return self._index_name

    @property
    def ttl(self) -> timedelta:
        """Get the default TTL applied to writes."""
        return self._ttl

    @property
    def closed(self) -> bool:
        """Whether close() has been called."""
        return self._closed

    @property
    def store(self) -> ScoreIndexStore:
        """Get the underlying store (for testing)."""
        return self._store
