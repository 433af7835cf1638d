"""
S3 media bucket configuration.

Settings for the bucket holding portfolio images.

Dependencies: pydantic_settings
System role: S3 media bucket configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from portfolio_backend.configs.base import settings_config


class S3StorageSettings(BaseSettings):
    """Settings for S3 media bucket operations."""

    model_config = settings_config("S3_STORAGE_")

    bucket: str = Field(
        default="portfolio-dev-media",
        description="S3 bucket for portfolio images",
    )
    region: str = Field(
        default="ap-northeast-2",
        description="AWS region for S3 bucket",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Custom S3 endpoint (MinIO, LocalStack); None for AWS",
    )
    public_base_url: str | None = Field(
        default=None,
        description="Base URL objects are served from (CDN); defaults to the bucket URL",
    )
