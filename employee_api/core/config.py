"""Application Configuration.

Centralized configuration using Pydantic Settings for type safety and validation.
"""

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application
    APP_NAME: str = "Employee Directory API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Upstream employee directory
    UPSTREAM_BASE_URL: str = Field(
        default="http://localhost:8112/api/v1/employee",
        description="Base URL of the upstream employee directory (list/get/create/delete live under it)"
    )
    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Timeout applied to every upstream call"
    )

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        """Normalize LOG_LEVEL and reject unknown level names."""
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown LOG_LEVEL '{v}'")
        return level

    @field_validator('UPSTREAM_BASE_URL', mode='after')
    @classmethod
    def strip_trailing_slash(cls, v):
        """Drop a trailing slash so paths can be joined with '/'."""
        return v.rstrip('/')


settings = Settings()
