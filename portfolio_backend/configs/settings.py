"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from portfolio_backend.configs.base import BaseSettings
from portfolio_backend.configs.database import DatabaseSettings
from portfolio_backend.configs.portfolio import PortfolioSettings
from portfolio_backend.configs.s3_storage import S3StorageSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    s3_storage: S3StorageSettings = S3StorageSettings()
    portfolio: PortfolioSettings = PortfolioSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are loaded once and cached.

    Returns:
        Settings: Application settings instance

    Usage:
        from portfolio_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
