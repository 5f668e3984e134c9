"""HTTP handlers for cache operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, validation, and error handling.
"""

import logging
import time
from datetime import timedelta

from fastapi import HTTPException, status

from score_cache.dto import (
    CacheItemResponse,
    CacheStatsResponse,
    CountResponse,
    GetItemResponse,
    HealthCheckResponse,
    ScoreRangeQuery,
    ScoreRangeResponse,
    SetItemRequest,
    SetItemResponse,
)
from score_cache.errors import (
    ClosedError,
    EncodingError,
    NotFoundError,
    ScoreCacheError,
    StoreError,
    ValidationError,
)
from score_cache.services import ScoreIndexedCache

logger = logging.getLogger(__name__)


def _to_http_error(error: ScoreCacheError) -> HTTPException:
    """Map a cache error kind to an HTTP status."""
    if isinstance(error, ClosedError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif isinstance(error, NotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(error, (ValidationError, EncodingError)):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(error, StoreError):
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return HTTPException(status_code=code, detail=f"{type(error).__name__}: {error}")


class CacheHandler:
    """HTTP handlers for cache operations.

    This handler delegates to ScoreIndexedCache and handles
    HTTP-specific concerns like:
    - Converting entities to DTOs
    - Mapping error kinds to status codes

    Example:
        ```python
        from score_cache.services import ScoreIndexedCache
        from score_cache.handlers import CacheHandler

        cache = await ScoreIndexedCache.create()
        handler = CacheHandler(cache=cache)

        # Use in FastAPI route
        @app.put("/items/{key}", response_model=SetItemResponse)
        async def set_item(key: str, request: SetItemRequest):
            return await handler.set_item(key, request)
        ```
    """

    def __init__(self, cache: ScoreIndexedCache[str]) -> None:
        """Initialize the cache handler.

        Args:
            cache: The score-indexed cache (required).
        """
        self._cache = cache

    async def set_item(self, key: str, request: SetItemRequest) -> SetItemResponse:
        """Handle PUT /items/{key} requests.

        Raises:
            HTTPException: 400 on bad input, 502 if either write fails
        """
        ttl = timedelta(seconds=request.ttl_seconds) if request.ttl_seconds is not None else None
        try:
            await self._cache.set(key, request.value, request.score, ttl=ttl)
        except ScoreCacheError as e:
            logger.warning("Failed to set %r: %s", key, e)
            raise _to_http_error(e) from e

        return SetItemResponse(
            success=True,
            key=key,
            score=request.score,
            message="Item stored successfully",
        )

    async def get_item(self, key: str) -> GetItemResponse:
        """Handle GET /items/{key} requests.

        Raises:
            HTTPException: 404 if the key is absent, 502 on store failure
        """
        try:
            value = await self._cache.get(key)
        except ScoreCacheError as e:
            raise _to_http_error(e) from e

        return GetItemResponse(key=key, value=value)

    async def delete_item(self, key: str) -> dict:
        """Handle DELETE /items/{key} requests.

        Raises:
            HTTPException: 404 if nothing was stored under key
        """
        try:
            removed = await self._cache.delete(key)
        except ScoreCacheError as e:
            raise _to_http_error(e) from e

        if not removed:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"No item stored under {key!r}",
            )
        return {"success": True, "key": key, "message": "Item deleted"}

    async def get_range(self, query: ScoreRangeQuery) -> ScoreRangeResponse:
        """Handle GET /items requests (score range lookup).

        Raises:
            HTTPException: 400 on a bad window, 502 if the index scan fails
        """
        start_time = time.time()
        try:
            items = await self._cache.get_by_score_range(
                query.min_score,
                query.max_score,
                offset=query.offset,
                limit=query.limit,
            )
        except ScoreCacheError as e:
            raise _to_http_error(e) from e
        lookup_time_ms = (time.time() - start_time) * 1000

        return ScoreRangeResponse(
            min_score=query.min_score,
            max_score=query.max_score,
            offset=query.offset,
            limit=query.limit,
            items=[
                CacheItemResponse(key=item.key, score=item.score, value=item.value)
                for item in items
            ],
            lookup_time_ms=lookup_time_ms,
        )

    async def count_range(self, min_score: float, max_score: float) -> CountResponse:
        """Handle GET /count requests."""
        try:
            count = await self._cache.count_by_score(min_score, max_score)
        except ScoreCacheError as e:
            raise _to_http_error(e) from e

        return CountResponse(min_score=min_score, max_score=max_score, count=count)

    async def get_stats(self) -> CacheStatsResponse:
        """Handle GET /stats requests."""
        try:
            stats = await self._cache.get_stats()
        except ScoreCacheError as e:
            raise _to_http_error(e) from e

        return CacheStatsResponse(**stats)

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        is_healthy = await self._cache.health_check()

        return HealthCheckResponse(
            status="healthy" if is_healthy else "unhealthy",
            cache_healthy=is_healthy,
        )
