"""Application configuration loaded from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration — reads from environment / .env file."""

    # REST Countries API
    api_base_url: str = "https://restcountries.com/v3.1"

    # Fetch / retry
    fetch_max_retries: int = 2
    backoff_base_seconds: float = 1.0
    http_timeout_seconds: float | None = None   # no request timeout

    # Cache
    cache_ttl_seconds: int = 86400              # 24 hours
    cache_key_prefix: str = "country_cache_"
    cache_memory_maxsize: int = 1024

    # Redis (empty = in-memory only)
    redis_url: str = ""

    # Logging
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def has_redis(self) -> bool:
        return bool(self.redis_url)

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000


settings = Settings()
