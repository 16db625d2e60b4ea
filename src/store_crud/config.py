import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Store
    store_backend: str = os.getenv("STORE_BACKEND", "memory")

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_key_prefix: str = os.getenv("REDIS_KEY_PREFIX", "crud")

    # Paging
    default_page_size: int = int(os.getenv("CRUD_DEFAULT_PAGE_SIZE", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def uses_redis(self) -> bool:
        """Check if the configured backend is Redis."""
        return self.store_backend.lower() == "redis"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.default_page_size <= 0:
            raise ValueError(
                f"CRUD_DEFAULT_PAGE_SIZE must be positive, got {self.default_page_size}"
            )

        if self.store_backend.lower() not in ("memory", "redis"):
            raise ValueError(
                f"STORE_BACKEND must be one of ['memory', 'redis'], got {self.store_backend}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
