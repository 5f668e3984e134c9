"""Cache item domain entity."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class CacheItem(Generic[T]):
    """A cached value together with the score it is indexed by.

    Returned by range queries. The key doubles as the ordered-index
    member, so the same string identifies the entry in both structures.

    Attributes:
        key: Primary key (and index member)
        score: Score the entry is ordered by
        value: Decoded payload
    """

    key: str
    score: float
    value: T
