from typing import Annotated, Any

from fastapi import FastAPI, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from score_cache.api.dependencies import HandlerDep, lifespan
from score_cache.config import settings
from score_cache.dto import (
    CacheStatsResponse,
    CountResponse,
    GetItemResponse,
    HealthCheckResponse,
    ScoreRangeQuery,
    ScoreRangeResponse,
    SetItemRequest,
    SetItemResponse,
)
from score_cache.services import ScoreIndexedCache


def create_app(cache: ScoreIndexedCache[str] | None = None) -> FastAPI:
    """Build the Score Cache API.

    Args:
        cache: Pre-built cache to serve. If None, the lifespan connects
            to Redis using settings.

    Returns:
        The FastAPI application
    """
    app = FastAPI(
        title="Score Cache API",
        description="Score-indexed cache over Redis sorted sets",
        version="0.1.0",
        lifespan=lifespan,
    )
    if cache is not None:
        app.state.cache = cache

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        """Report request validation failures without echoing the input.

        The rejected input may be NaN or infinity, which JSON cannot carry.
        """
        errors = [{"loc": err["loc"], "msg": err["msg"], "type": err["type"]} for err in exc.errors()]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": jsonable_encoder(errors)},
        )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Score Cache API",
            "version": "0.1.0",
            "description": "Score-indexed cache over Redis sorted sets",
            "endpoints": {
                "items": "/items",
                "count": "/count",
                "stats": "/stats",
                "health": "/health",
                "docs": "/docs",
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/stats", response_model=CacheStatsResponse)
    async def stats(handler: HandlerDep) -> CacheStatsResponse:
        """Get cache statistics."""
        return await handler.get_stats()

    @app.get("/items", response_model=ScoreRangeResponse)
    async def get_range(
        handler: HandlerDep,
        query: Annotated[ScoreRangeQuery, Query()],
    ) -> ScoreRangeResponse:
        """Get items whose score falls in [min_score, max_score]."""
        return await handler.get_range(query)

    @app.get("/count", response_model=CountResponse)
    async def count_range(
        handler: HandlerDep,
        min_score: Annotated[float, Query(allow_inf_nan=False)],
        max_score: Annotated[float, Query(allow_inf_nan=False)],
    ) -> CountResponse:
        """Count indexed items whose score falls in [min_score, max_score]."""
        return await handler.count_range(min_score, max_score)

    @app.put("/items/{key}", response_model=SetItemResponse)
    async def set_item(key: str, request: SetItemRequest, handler: HandlerDep) -> SetItemResponse:
        """Store an item under key, indexed by its score."""
        return await handler.set_item(key, request)

    @app.get("/items/{key}", response_model=GetItemResponse)
    async def get_item(key: str, handler: HandlerDep) -> GetItemResponse:
        """Get a single item by key."""
        return await handler.get_item(key)

    @app.delete("/items/{key}")
    async def delete_item(key: str, handler: HandlerDep) -> dict:
        """Delete an item from the index and the value table."""
        return await handler.delete_item(key)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "score_cache.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
