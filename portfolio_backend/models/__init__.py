"""Input models for portfolio operations."""

from portfolio_backend.models.portfolio import PortfolioCreate, PortfolioUpdate
from portfolio_backend.models.upload import ImageUpload

__all__ = ["ImageUpload", "PortfolioCreate", "PortfolioUpdate"]
