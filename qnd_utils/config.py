"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - Every setting can be overridden with a QND_-prefixed environment variable
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - Defaults work out of the box: a local SQLite file for storage, JSON logs at INFO
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """qnd-utils settings from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QND_", env_file=".env", case_sensitive=False,
    )

    # Storage ("memory://" selects the in-memory backend)
    storage_url: str = "sqlite:///qnd_storage.db"
    storage_echo: bool = False

    @field_validator("storage_url", mode="before")
    @classmethod
    def normalise_postgres_url(cls, v: str) -> str:
        """Heroku-style postgres:// URLs are not accepted by SQLAlchemy 2."""
        if isinstance(v, str) and v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql://", 1)
        return v

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
