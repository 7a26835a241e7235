"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Database (Postgres in production, e.g. postgresql+psycopg2://...)
    DATABASE_URL: str = "sqlite:///./junyper.db"

    # Plaid credentials
    PLAID_CLIENT_ID: str = ""
    PLAID_SECRET: str = ""
    PLAID_ENVIRONMENT: str = "sandbox"
    PLAID_CLIENT_NAME: str = "Junyper"
    PLAID_COUNTRY_CODES: list[str] = ["US"]
    PLAID_LANGUAGE: str = "en"

    # HTTP
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # Upper bound on concurrent Plaid calls when refreshing a user's banks
    ACCOUNT_FETCH_WORKERS: int = 8

    @field_validator("PLAID_ENVIRONMENT", mode="before")
    @classmethod
    def normalize_plaid_environment(cls, v: str) -> str:
        """Lowercase the Plaid environment name."""
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize LOG_LEVEL to an uppercase Python logging level."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid:
            raise ValueError(f"LOG_LEVEL must be one of {valid}, got {v!r}")
        return v.upper()

    # App settings
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Build the settings object once per process.

    Handlers receive it through ``Depends(get_settings)`` so tests can
    override it with an explicitly constructed instance.
    """
    return Settings()
