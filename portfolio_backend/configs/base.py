"""
Shared configuration pieces.

Every settings class reads the same optional .env file; settings_config()
builds that SettingsConfigDict for a given variable prefix. BaseSettings
carries the process-wide fields of the root Settings object.

Dependencies: pydantic, pydantic_settings
System role: Foundation for all configuration classes
"""

import logging
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def settings_config(env_prefix: str = "") -> SettingsConfigDict:
    """
    Build the settings config used across portfolio_backend.

    Args:
        env_prefix: Prefix of the environment variables, e.g. "POSTGRES_"

    Returns:
        SettingsConfigDict reading ENV_FILE, case-insensitive, ignoring unknown keys
    """
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
    )


class BaseSettings(PydanticBaseSettings):
    """Process-wide settings without a prefix (ENVIRONMENT, LOG_LEVEL)."""

    model_config = settings_config()

    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level name used by configure_logging()",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return level

    @property
    def is_production(self) -> bool:
        return self.environment == "production"
