"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class CacheItemResponse(BaseModel):
    """Single cached item (in the items array)."""

    key: str = Field(..., description="Primary key of the item")
    score: float = Field(..., description="Score the item is indexed by")
    value: str = Field(..., description="The cached value")


class GetItemResponse(BaseModel):
    """Response DTO for a point lookup."""

    key: str = Field(..., description="The requested key")
    value: str = Field(..., description="The cached value")


class SetItemResponse(BaseModel):
    """Response DTO for a store operation."""

    success: bool = Field(..., description="Whether the operation succeeded")
    key: str = Field(..., description="The key the item was stored under")
    score: float = Field(..., description="The score the item was indexed by")
    message: str = Field(..., description="Human-readable status message")


class ScoreRangeResponse(BaseModel):
    """Response DTO for a score range lookup.

    items may hold fewer than limit entries even when more members are
    indexed in range: members whose value expired are skipped.
    """

    min_score: float = Field(..., description="Lower bound (inclusive)")
    max_score: float = Field(..., description="Upper bound (inclusive)")
    offset: int = Field(..., description="Matching items skipped", ge=0)
    limit: int = Field(..., description="Maximum items requested", ge=0)
    items: list[CacheItemResponse] = Field(
        default_factory=list,
        description="Items ascending by score, ties by key",
    )
    lookup_time_ms: float = Field(..., description="Time taken for the lookup in milliseconds")


class CountResponse(BaseModel):
    """Response DTO for counting indexed members in a range."""

    min_score: float = Field(..., description="Lower bound (inclusive)")
    max_score: float = Field(..., description="Upper bound (inclusive)")
    count: int = Field(..., description="Indexed members in range", ge=0)


class CacheStatsResponse(BaseModel):
    """Response DTO for cache statistics."""

    index_name: str = Field(..., description="Name of the ordered index")
    indexed_members: int = Field(
        ...,
        description="Members in the ordered index (values may have expired)",
        ge=0,
    )
    ttl_seconds: float = Field(
        ...,
        description="Default time-to-live for cached values in seconds",
        gt=0,
    )


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the store is reachable")
