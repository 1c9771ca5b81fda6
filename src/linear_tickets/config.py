"""Configuration management for Linear Tickets."""

import os
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env" if os.getenv("ENVIRONMENT") != "test" else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Linear Tickets"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Linear
    linear_api_key: Optional[str] = Field(
        default=None,
        description="Linear personal API key, sent as a bearer token",
    )
    linear_api_url: str = Field(default="https://api.linear.app/graphql")

    # Transport
    http_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds applied to every Linear request",
    )

    @field_validator("linear_api_key", mode="before")
    @classmethod
    def validate_api_key(cls, v):
        # Blank values from .env files count as "not configured"
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    def get_log_level(self) -> str:
        """Effective log level, forcing DEBUG when debug is on."""
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
