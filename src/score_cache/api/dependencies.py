"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Cache and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from score_cache.config import configure_logging
from score_cache.handlers import CacheHandler
from score_cache.services import ScoreIndexedCache

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The CacheHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "cache_handler", None)
    if handler is None:
        raise RuntimeError("CacheHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes the layers and stores them in app.state:
    1. Cache (service + Redis store) - app.state.cache, unless one was
       injected before startup
    2. Handler (HTTP endpoints) - app.state.cache_handler

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Cleanup:
        Closes the cache and removes it from app.state on shutdown
    """
    configure_logging()

    cache = getattr(app.state, "cache", None)
    if cache is None:
        # Fails startup with CacheConnectionError if Redis is unreachable
        cache = await ScoreIndexedCache.create()

    app.state.cache = cache
    app.state.cache_handler = CacheHandler(cache=cache)

    logger.info("Score cache ready: index=%s ttl=%ss", cache.index_name, cache.ttl.total_seconds())

    yield

    await cache.close()
    del app.state.cache_handler
    del app.state.cache
    logger.info("Score cache shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[CacheHandler, Depends(get_handler)]
