"""Domain entities for internal representation.

These are pure frozen dataclasses used by the cache service and
returned to library callers. They are NOT used for API contracts, use
DTOs from the dto package for that.
"""

from .cache_item import CacheItem
from .score_range import ScoreRange, check_score

__all__ = ["CacheItem", "ScoreRange", "check_score"]
