"""
Module: settings.py
Description: Client configuration using pydantic-settings.

Loads IronMQ project credentials and transport tuning from environment
variables prefixed with IRONMQ_. Supports .env files for local development.
"""

import re
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ironmq.models.queue import Cloud


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="IRONMQ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Credentials
    project_id: Optional[str] = Field(
        default=None,
        description="IronMQ project identifier"
    )
    token: Optional[str] = Field(
        default=None,
        description="OAuth token sent on every request"
    )

    # Endpoint settings
    cloud: Cloud = Field(default=Cloud.AWS, description="Hosting cloud region")
    api_version: str = Field(default="1", description="REST API version")
    service_domain: str = Field(default="iron.io", description="Service domain")

    # Transport settings
    request_timeout: float = Field(
        default=30.0,
        ge=1,
        le=300,
        description="HTTP timeout in seconds for each request"
    )
    connect_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts made when a connection cannot be established"
    )
    retry_backoff: float = Field(
        default=0.5,
        ge=0,
        description="Multiplier for exponential wait between connection attempts"
    )

    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('api_version')
    @classmethod
    def validate_api_version(cls, v: str) -> str:
        """Validate API version is a bare number."""
        if not re.match(r'^[0-9]+$', v):
            raise ValueError("api_version must contain only digits")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid logging level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of: {', '.join(valid_levels)}")
        return v.upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
