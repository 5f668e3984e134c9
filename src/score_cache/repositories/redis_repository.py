"""Redis implementation of ScoreIndexStore.

The ordered index is a Redis sorted set and the primary table is plain
Redis string keys with a PX expiry. It's the default implementation
and satisfies the ScoreIndexStore protocol.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import timedelta

import redis.asyncio as redis
from redis.exceptions import RedisError

from score_cache.config import get_redis_client
from score_cache.errors import StoreError

logger = logging.getLogger(__name__)


class RedisScoreIndexRepository:
    """Redis implementation using a sorted set plus string keys.

    This class satisfies the ScoreIndexStore protocol through structural
    typing - no explicit inheritance needed.

    Uses:
    - ZADD / ZRANGEBYSCORE ... WITHSCORES LIMIT for the ordered index
    - SET ... PX / GET / MGET / DEL for the primary table
    - Raw bytes on the wire (decode_responses=False)
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis repository.

        Args:
            redis_client: asyncio Redis client. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(
        cls,
        url: str | None = None,
        password: str | None = None,
        db: int | None = None,
    ) -> "RedisScoreIndexRepository":
        """Factory method to create RedisScoreIndexRepository with defaults.

        Args:
            url: Redis URL. If None, uses settings.
            password: Redis password. If None, uses settings.
            db: Database number. If None, uses settings.

        Returns:
            Configured RedisScoreIndexRepository (not yet connected)
        """
        return cls(redis_client=get_redis_client(url=url, password=password, db=db))

    @contextmanager
    def _translate_errors(self, operation: str) -> Iterator[None]:
        """Turn driver exceptions into StoreError."""
        try:
            yield
        except RedisError as e:
            raise StoreError(f"Redis {operation} failed: {e}") from e

    async def ping(self) -> bool:
        with self._translate_errors("PING"):
            return bool(await self._client.ping())

    async def get(self, key: str) -> bytes | None:
        with self._translate_errors("GET"):
            return await self._client.get(key)

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        if not keys:
            return []
        with self._translate_errors("MGET"):
            return list(await self._client.mget(keys))

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        with self._translate_errors("SET"):
            await self._client.set(key, value, px=ttl)

    async def delete(self, key: str) -> bool:
        with self._translate_errors("DEL"):
            result: int = await self._client.delete(key)
        return result > 0

    async def add_member(self, index: str, member: str, score: float) -> None:
        with self._translate_errors("ZADD"):
            await self._client.zadd(index, {member: score})

    async def remove_member(self, index: str, member: str) -> bool:
        with self._translate_errors("ZREM"):
            result: int = await self._client.zrem(index, member)
        return result > 0

    async def range_by_score(
        self,
        index: str,
        min_score: float,
        max_score: float,
        offset: int,
        limit: int | None,
    ) -> list[tuple[str, float]]:
        """Windowed ZRANGEBYSCORE with scores.

        The LIMIT clause is always sent, so the window is applied by the
        server. A negative count tells Redis "no cap".
        """
        with self._translate_errors("ZRANGEBYSCORE"):
            rows = await self._client.zrangebyscore(
                index,
                min_score,
                max_score,
                start=offset,
                num=-1 if limit is None else limit,
                withscores=True,
            )

        members = []
        for member, score in rows:
            if isinstance(member, bytes):
                member = member.decode("utf-8")
            members.append((member, float(score)))
        return members

    async def count_by_score(self, index: str, min_score: float, max_score: float) -> int:
        with self._translate_errors("ZCOUNT"):
            return int(await self._client.zcount(index, min_score, max_score))

    async def cardinality(self, index: str) -> int:
        with self._translate_errors("ZCARD"):
            return int(await self._client.zcard(index))

    async def close(self) -> None:
        """Close the Redis connection pool."""
        with self._translate_errors("close"):
            await self._client.aclose()
        logger.debug("Redis connection closed")

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
