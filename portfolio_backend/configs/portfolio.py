"""
Portfolio behaviour settings.

Dependencies: pydantic_settings
System role: Tunables for attachment handling and paging
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from portfolio_backend.configs.base import settings_config


class PortfolioSettings(BaseSettings):
    """Settings for portfolio media and query behaviour."""

    model_config = settings_config("PORTFOLIO_")

    image_folder: str = Field(
        default="images",
        description="Blob store folder for representative and gallery images",
    )
    gallery_upload_policy: Literal["all_or_nothing", "best_effort"] = Field(
        default="all_or_nothing",
        description="How gallery replacement reacts to an individual upload failure",
    )
    max_page_size: int = Field(
        default=100,
        gt=0,
        description="Largest page size accepted by listing and search",
    )
    sweep_grace_minutes: int = Field(
        default=60,
        ge=0,
        description="Minimum blob age before the orphan sweep may delete it",
    )
