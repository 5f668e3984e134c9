"""Repository layer for data access.

This layer hides the store (Redis, or an in-process stand-in) behind
the ScoreIndexStore protocol. This enables:
- Swapping the store without touching the cache service
- Unit testing without a live Redis
- One place that knows driver exceptions

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from score_cache.protocols import ScoreIndexStore

from .memory_repository import InMemoryScoreIndexRepository
from .redis_repository import RedisScoreIndexRepository

__all__ = [
    "ScoreIndexStore",
    "InMemoryScoreIndexRepository",
    "RedisScoreIndexRepository",
]
