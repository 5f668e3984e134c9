"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import ScoreRangeQuery, SetItemRequest
from .responses import (
    CacheItemResponse,
    CacheStatsResponse,
    CountResponse,
    GetItemResponse,
    HealthCheckResponse,
    ScoreRangeResponse,
    SetItemResponse,
)

__all__ = [
    "SetItemRequest",
    "ScoreRangeQuery",
    "CacheItemResponse",
    "GetItemResponse",
    "SetItemResponse",
    "ScoreRangeResponse",
    "CountResponse",
    "CacheStatsResponse",
    "HealthCheckResponse",
]
