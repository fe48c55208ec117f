"""Application settings and environment configuration loading."""

from __future__ import annotations

from pathlib import Path
from typing import Literal, Self

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ALEMBIC_INI = PROJECT_ROOT / "alembic.ini"
MIGRATIONS_DIR = PROJECT_ROOT / "migrations"

# Bare dialect schemes mapped to the async drivers the engine needs.
ASYNC_DRIVER_SCHEMES = {
    "postgres": "postgresql+psycopg",
    "postgresql": "postgresql+psycopg",
    "sqlite": "sqlite+aiosqlite",
}
API_TOKEN_MIN_LENGTH = 32
API_TOKEN_PLACEHOLDERS = frozenset(
    {
        "change-me",
        "changeme",
        "replace-me",
        "replace-with-strong-random-token",
    },
)


class Settings(BaseSettings):
    """Typed runtime configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        # Load the project `.env` regardless of current working directory.
        env_file=[DEFAULT_ENV_FILE, ".env"],
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = "dev"
    database_url: str = "sqlite+aiosqlite:///./tasks.db"

    # Shared bearer token; empty disables auth (single-tenant, unscoped).
    api_token: str = ""

    cors_origins: str = ""

    # Database lifecycle
    db_auto_migrate: bool = False

    # Text generation (Anthropic Messages API)
    anthropic_api_key: str = ""
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = Field(default=1024, ge=1)
    llm_timeout_seconds: float = Field(default=60.0, gt=0)

    # Logging
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    log_use_utc: bool = False
    request_log_slow_ms: int = Field(default=1000, ge=0)
    request_log_include_health: bool = False

    @model_validator(mode="after")
    def _defaults(self) -> Self:
        token = self.api_token.strip()
        if token and (
            len(token) < API_TOKEN_MIN_LENGTH or token.lower() in API_TOKEN_PLACEHOLDERS
        ):
            raise ValueError(
                "API_TOKEN must be at least 32 characters and non-placeholder when set.",
            )
        # In dev, default to applying Alembic migrations at startup to avoid
        # schema drift (e.g. missing newly-added columns).
        if "db_auto_migrate" not in self.model_fields_set and self.environment == "dev":
            self.db_auto_migrate = True
        return self

    @property
    def async_database_url(self) -> str:
        """``database_url`` with a bare dialect scheme swapped for its async driver."""
        scheme, sep, rest = self.database_url.partition("://")
        if not sep:
            return self.database_url
        return f"{ASYNC_DRIVER_SCHEMES.get(scheme, scheme)}://{rest}"


settings = Settings()
