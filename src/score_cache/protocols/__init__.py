"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of store implementations (Redis, in-memory, ...)
- Unit testing with fake or failing stores
- Swapping value encodings without touching the cache

Usage:
    ```python
    from score_cache.protocols import ScoreIndexStore, ValueCodec

    store: ScoreIndexStore = RedisScoreIndexRepository.create()
    codec: ValueCodec[str] = TextCodec()
    ```
"""

from .score_index_store import ScoreIndexStore
from .value_codec import ValueCodec

__all__ = [
    "ScoreIndexStore",
    "ValueCodec",
]
