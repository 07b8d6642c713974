"""
Configuration settings for the Parcel Tracker.

This module handles application configuration using Pydantic settings.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    app_name: str = "Parcel Tracker"
    api_version: str = "v1"
    debug: bool = False

    # Database Configuration
    database_url: str = "sqlite+aiosqlite:///tracker.db"
    db_echo: bool = False
    # Pool sizing only applies to server databases (ignored for SQLite)
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    class Config:
        env_file = ".env"
        case_sensitive = False


settings = Settings()
