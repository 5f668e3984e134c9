"""Score index store protocol.

Defines the primitives the score-indexed cache needs from a remote
store: a primary key-value table with expiry, and an ordered index
(member -> score) with windowed range scans.

Implementations can include:
- Redis sorted sets + strings (default)
- An in-process store for tests and offline use
- Any other store offering the same primitives
"""

from datetime import timedelta
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreIndexStore(Protocol):
    """Protocol for score index store backends.

    Any type that implements these methods satisfies the protocol, no
    explicit inheritance needed.

    Implementations must raise StoreError for transport or protocol
    failures and never leak driver-specific exceptions.

    Example:
        ```python
        from score_cache.protocols import ScoreIndexStore

        store: ScoreIndexStore = RedisScoreIndexRepository.create()
        store: ScoreIndexStore = InMemoryScoreIndexRepository()
        ```
    """

    async def ping(self) -> bool:
        """Check the store is reachable.

        Returns:
            True if the store answered
        """
        ...

    async def get(self, key: str) -> bytes | None:
        """Read a primary-table value.

        Args:
            key: The primary key

        Returns:
            The stored bytes, or None if absent or expired
        """
        ...

    async def get_many(self, keys: list[str]) -> list[bytes | None]:
        """Read several primary-table values in one round trip.

        Args:
            keys: The primary keys

        Returns:
            Values in the order of keys, None where absent or expired
        """
        ...

    async def set(self, key: str, value: bytes, ttl: timedelta) -> None:
        """Upsert a primary-table value with expiry.

        Args:
            key: The primary key
            value: Encoded payload
            ttl: Time-to-live for the entry
        """
        ...

    async def delete(self, key: str) -> bool:
        """Delete a primary-table value.

        Returns:
            True if the key existed
        """
        ...

    async def add_member(self, index: str, member: str, score: float) -> None:
        """Insert or move a member of an ordered index.

        Args:
            index: Ordered index name
            member: Member string
            score: New score for the member
        """
        ...

    async def remove_member(self, index: str, member: str) -> bool:
        """Remove a member from an ordered index.

        Returns:
            True if the member existed
        """
        ...

    async def range_by_score(
        self,
        index: str,
        min_score: float,
        max_score: float,
        offset: int,
        limit: int | None,
    ) -> list[tuple[str, float]]:
        """Windowed range scan over an ordered index.

        Bounds are inclusive. Results are ascending by score, ties
        ordered by member string.

        Args:
            index: Ordered index name
            min_score: Lower bound (inclusive)
            max_score: Upper bound (inclusive)
            offset: Number of matching members to skip
            limit: Maximum number of members, None for no cap

        Returns:
            List of (member, score) pairs
        """
        ...

    async def count_by_score(self, index: str, min_score: float, max_score: float) -> int:
        """Count members with a score in the inclusive range."""
        ...

    async def cardinality(self, index: str) -> int:
        """Count all members of an ordered index."""
        ...

    async def close(self) -> None:
        """Release the underlying connection."""
        ...
