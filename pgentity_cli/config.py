"""Configuration management for pgentity-cli."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.pgentity/.env
    3. Package directory (where this file is located)
    """
    # Current directory
    if os.path.exists(".env"):
        return ".env"

    # User config directory
    user_env = Path.home() / ".pgentity" / ".env"
    if user_env.exists():
        return str(user_env)

    # Package directory
    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PGENTITY_",
        env_file=_find_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Catalog connection
    connect_timeout: int = Field(
        default=10,
        description="Seconds to wait when connecting to PostgreSQL"
    )

    # Console logging
    log_level: str = Field(
        default="WARNING",
        description="Log level for console output (DEBUG, INFO, WARNING, ERROR)"
    )

    # CLI run logging configuration
    cli_logging_enabled: bool = Field(
        default=True,
        description="Record generate runs in a local SQLite database"
    )
    cli_logging_db_path: Optional[str] = Field(
        default=None,
        description="Path to CLI runs database file (default: ~/.pgentity/cli_runs.db)"
    )
    cli_logging_retention_days: int = Field(
        default=30,
        description="Number of days to retain CLI run log entries"
    )


# Global settings instance
settings = Settings()
