"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from portfolio_backend.configs.portfolio import PortfolioSettings
from portfolio_backend.configs.settings import Settings, get_settings

__all__ = ["PortfolioSettings", "Settings", "get_settings"]
