"""Score Cache - a score-indexed cache layer over Redis.

Values are stored under a primary key and, at the same time, indexed
by a numeric score in a sorted set, so "everything with a score in
[min, max]" is a windowed index scan instead of a keyspace scan.

Layers:
    - protocols: Interface contracts (ScoreIndexStore, ValueCodec)
    - repositories: Store implementations (Redis, in-memory)
    - services: The cache itself (ScoreIndexedCache)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (CacheItem, ScoreRange)
    - errors: Exception taxonomy

Usage:
    ```python
    from score_cache import ScoreIndexedCache

    async with await ScoreIndexedCache.create(address="localhost:6379") as cache:
        await cache.set("item1", "Value for item 1", 100)
        items = await cache.get_by_score_range(50, 150, offset=0, limit=10)
    ```

For HTTP API:
    ```python
    from score_cache.api.app import app
    ```
"""

from score_cache.codecs import TextCodec
from score_cache.config import get_redis_client, settings
from score_cache.entities import CacheItem, ScoreRange
from score_cache.errors import (
    CacheConnectionError,
    ClosedError,
    EncodingError,
    IndexWriteError,
    NotFoundError,
    ScoreCacheError,
    StoreError,
    ValidationError,
    ValueWriteError,
)
from score_cache.protocols import ScoreIndexStore, ValueCodec
from score_cache.repositories import InMemoryScoreIndexRepository, RedisScoreIndexRepository
from score_cache.services import ScoreIndexedCache

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "ScoreIndexStore",
    "ValueCodec",
    # Services
    "ScoreIndexedCache",
    # Repositories (data access)
    "RedisScoreIndexRepository",
    "InMemoryScoreIndexRepository",
    # Codecs
    "TextCodec",
    # Entities (domain models)
    "CacheItem",
    "ScoreRange",
    # Errors
    "ScoreCacheError",
    "CacheConnectionError",
    "ValidationError",
    "EncodingError",
    "StoreError",
    "IndexWriteError",
    "ValueWriteError",
    "NotFoundError",
    "ClosedError",
]
