"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field

from score_cache.config import settings


class SetItemRequest(BaseModel):
    """Request DTO for storing an item.

    The key comes from the URL path; the handler converts this to a
    call to the cache service.
    """

    value: str = Field(..., description="The text payload to cache")
    score: float = Field(
        ...,
        description="Score the item is indexed by (finite number)",
        allow_inf_nan=False,
    )
    ttl_seconds: float | None = Field(
        None,
        description="Override the default time-to-live for this item",
        gt=0.0,
    )


class ScoreRangeQuery(BaseModel):
    """Query parameters for a score range lookup."""

    min_score: float = Field(..., description="Lower bound (inclusive)", allow_inf_nan=False)
    max_score: float = Field(..., description="Upper bound (inclusive)", allow_inf_nan=False)
    offset: int = Field(0, description="Matching items to skip", ge=0)
    limit: int = Field(
        default_factory=lambda: settings.cache_range_limit,
        description="Maximum items to return (0 returns none)",
        ge=0,
    )
