"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on the cache service, not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (Store)
"""

from .cache_handler import CacheHandler

__all__ = [
    "CacheHandler",
]
