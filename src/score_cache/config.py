import logging
import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD") or None
    redis_db: int = int(os.getenv("REDIS_DB", "0"))

    # Cache
    cache_index_name: str = os.getenv("CACHE_INDEX_NAME", "score_cache")
    cache_ttl: int = int(os.getenv("CACHE_TTL", "3600"))  # 1 hour default
    cache_range_limit: int = int(os.getenv("CACHE_RANGE_LIMIT", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError(f"CACHE_TTL must be a positive number of seconds, got {self.cache_ttl}")

        if self.cache_range_limit <= 0:
            raise ValueError(f"CACHE_RANGE_LIMIT must be positive, got {self.cache_range_limit}")

        if self.redis_db < 0:
            raise ValueError(f"REDIS_DB must be >= 0, got {self.redis_db}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client(
    url: str | None = None,
    password: str | None = None,
    db: int | None = None,
) -> redis.Redis:
    """Create an asyncio Redis client.

    The client connects lazily; nothing touches the network until the
    first command.
    """
    return redis.from_url(
        url or settings.redis_url,
        password=password if password is not None else settings.redis_password,
        db=db if db is not None else settings.redis_db,
        decode_responses=False,
    )


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for entry points (API, scripts)."""
    logging.basicConfig(
        level=level or settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
