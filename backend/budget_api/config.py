"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - The storage engine is selected by database_url's scheme, nothing else

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Settings passed explicitly into create_app(): tests build their own instance
      instead of mutating process environment
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./budget.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    # Production schema is managed by alembic; create_all is for local/dev use
    database_create_schema: bool = True

    # Exchange-rate provider
    exchange_rate_base_url: str = "https://v6.exchangerate-api.com/v6"
    exchange_rate_api_key: str = "placeholder-api-key"
    exchange_rate_timeout_seconds: float = 10.0

    # API
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
