import os
from dataclasses import dataclass
from functools import lru_cache

import redis.asyncio as redis
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "luchadeer")
    # "redis" or "memory" (single process, local development only)
    cache_backend: str = os.getenv("CACHE_BACKEND", "redis")

    # Giant Bomb (media catalog)
    giantbomb_host: str = os.getenv("GIANTBOMB_HOST", "www.giantbomb.com")
    giantbomb_api_path: str = os.getenv("GIANTBOMB_API_PATH", "/api")
    # Key used to proxy users to Giant Bomb. Only use a subscriber key here
    # if subscriber content should be proxied.
    giantbomb_proxy_api_key: str = os.getenv("GIANTBOMB_PROXY_API_KEY", "")

    # YouTube (video search)
    youtube_api_host: str = os.getenv("YOUTUBE_API_HOST", "www.googleapis.com")
    youtube_search_path: str = os.getenv("YOUTUBE_SEARCH_PATH", "/youtube/v3/search")
    youtube_api_key: str = os.getenv("YOUTUBE_API_KEY", "")
    youtube_unarchived_channel_id: str = os.getenv("YOUTUBE_UNARCHIVED_CHANNEL_ID", "")

    # Upstream HTTP
    upstream_scheme: str = os.getenv("UPSTREAM_SCHEME", "https")
    upstream_timeout: float = float(os.getenv("UPSTREAM_TIMEOUT", "10.0"))

    # Feature flags
    proxy_requests_enabled: bool = _env_bool("PROXY_REQUESTS_ENABLED", "true")
    search_proxy_enabled: bool = _env_bool("SEARCH_PROXY_ENABLED", "true")

    # Cache TTLs (seconds)
    default_cache_ttl: int = int(os.getenv("DEFAULT_CACHE_TTL", "86400"))  # 24 hours
    list_request_cache_ttl: int = int(os.getenv("LIST_REQUEST_CACHE_TTL", "3600"))  # 1 hour
    game_detail_cache_ttl: int = int(os.getenv("GAME_DETAIL_CACHE_TTL", "86400"))  # 24 hours
    video_detail_cache_ttl: int = int(os.getenv("VIDEO_DETAIL_CACHE_TTL", "604800"))  # 7 days
    bad_request_cache_ttl: int = int(os.getenv("BAD_REQUEST_CACHE_TTL", "3600"))  # 1 hour

    # Paging
    page_size: int = int(os.getenv("PAGE_SIZE", "100"))

    # Redirect target for /
    client_download_url: str = os.getenv("CLIENT_DOWNLOAD_URL", "")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = _env_bool("API_RELOAD", "false")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_json: bool = _env_bool("LOG_JSON", "false")

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        ttls = {
            "DEFAULT_CACHE_TTL": self.default_cache_ttl,
            "LIST_REQUEST_CACHE_TTL": self.list_request_cache_ttl,
            "GAME_DETAIL_CACHE_TTL": self.game_detail_cache_ttl,
            "VIDEO_DETAIL_CACHE_TTL": self.video_detail_cache_ttl,
            "BAD_REQUEST_CACHE_TTL": self.bad_request_cache_ttl,
        }
        for name, value in ttls.items():
            if value <= 0:
                raise ValueError(f"{name} must be a positive number of seconds, got {value}")

        if self.cache_backend not in ("redis", "memory"):
            raise ValueError(f"CACHE_BACKEND must be one of [redis, memory], got {self.cache_backend}")

        if self.page_size <= 0:
            raise ValueError(f"PAGE_SIZE must be positive, got {self.page_size}")

        if self.upstream_timeout <= 0:
            raise ValueError(f"UPSTREAM_TIMEOUT must be positive, got {self.upstream_timeout}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create an asyncio Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
