"""
Core business logic module.

Contains the exception hierarchy and query/paging rules shared by services.
"""

from portfolio_backend.core.exceptions import (
    InvalidSearchConditionError,
    MissingSkillsError,
    NoPortfoliosMatchedError,
    PermissionDeniedError,
    PortfolioNotFoundError,
    PortfolioServiceException,
    StorageError,
    UnknownSkillError,
    ValidationError,
)
from portfolio_backend.core.pagination import Page, PageRequest, SortKey, get_page_request

__all__ = [
    # Exceptions
    "PortfolioServiceException",
    "ValidationError",
    "PermissionDeniedError",
    "PortfolioNotFoundError",
    "NoPortfoliosMatchedError",
    "InvalidSearchConditionError",
    "MissingSkillsError",
    "UnknownSkillError",
    "StorageError",
    # Paging
    "Page",
    "PageRequest",
    "SortKey",
    "get_page_request",
]
