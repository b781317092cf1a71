"""
Configuration Settings
======================

Centralized configuration using Pydantic V2 Settings.
"""

import logging
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_env: str = Field(default="development")
    app_debug: bool = Field(default=False)
    database_url: str = Field(default="sqlite+aiosqlite:///./data/todos.db")
    db_pool_size: int = Field(default=5, ge=1)
    storage_backend: Literal["memory", "database"] = Field(default="memory")
    log_level: str = Field(default="INFO")

    @field_validator("storage_backend", mode="before")
    @classmethod
    def normalize_backend(cls, v):
        """Accept backend names case-insensitively ("Database", " memory ")."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows about."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings


def print_settings(current: Optional[Settings] = None) -> None:
    """Print the active settings with database credentials masked."""
    current = current or settings
    print("=" * 60)
    print("Settings")
    print("=" * 60)
    for name, value in current.model_dump().items():
        if name == "database_url":
            value = make_url(value).render_as_string(hide_password=True)
        print(f"  {name}: {value}")
    print("=" * 60)
