"""
Paie Maroc Configuration

Environment-based settings for the payroll API.
Statutory rates are not configured here; they live in
engines/services/statutory_constants.py.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Application
    app_name: str = "Paie Maroc"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Pass-through metadata
    instance: str = Field(default="alpha", description="Deployment instance label")
    company_name: str = Field(
        default="ENTREPRISE",
        description="Company label used when a request does not name one",
    )

    # Batch limits
    batch_max_employees: int = Field(default=500, ge=1)

    # Error Monitoring
    sentry_dsn: str = Field(
        default="",
        description="Sentry DSN for error monitoring (leave empty to disable)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
