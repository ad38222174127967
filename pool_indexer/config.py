"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Database credentials come from environment variables (never hardcoded beyond
      the docker-compose default)

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - halt_on_zero_supply defaults to False: a zero-supply share computation is
      reported and processing continues; True restores the hard halt
    - reported_conditions_limit bounds the in-memory condition buffer the pipeline
      keeps for GET /api/v1/health/conditions
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://indexer:indexer@db:5432/pool_indexer"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Pool
    pool_name: str = "USD0-USD0++"

    # Accounting policy
    halt_on_zero_supply: bool = False
    reported_conditions_limit: int = 1000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
