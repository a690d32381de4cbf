"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache): single instance per process
    - Settings only shape the transport edge (CORS, logging, auth header name);
      routes and their status tables are code, not configuration

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every field: works out-of-the-box in tests
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="CONDUIT_", case_sensitive=False,
    )

    # API
    api_title: str = "Conduit API"
    api_version: str = "1.0.0"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Authentication
    auth_header_name: str = "Authorization"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("log_format")
    @classmethod
    def check_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("json", "text"):
            raise ValueError("log_format must be 'json' or 'text'")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
