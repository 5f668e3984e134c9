"""Service layer for business logic.

This layer holds the score-indexed cache itself: the dual write, the
point lookup and the range-read reconciliation. It depends on
protocols (interfaces), not concrete stores, making it testable and
flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (Store)

Usage:
    ```python
    from score_cache.services import ScoreIndexedCache

    # Using factory method (recommended)
    cache = await ScoreIndexedCache.create()
    cache = await ScoreIndexedCache.create(address="localhost:6379", ttl=600)

    # Or manual creation
    cache = ScoreIndexedCache(store=store, index_name="leaderboard")
    ```
"""

from .score_indexed_cache import ScoreIndexedCache

__all__ = [
    "ScoreIndexedCache",
]
