"""
Paging and sort-key rules for portfolio listings.

Resolves the public sort keys ("createdAt", "views", "likes") to stored
attributes and validates page parameters before any query runs.

Dependencies: None (pure domain layer)
System role: Query/sort helpers shared by listing and search
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Sequence, TypeVar

from portfolio_backend.core.exceptions import InvalidSearchConditionError, ValidationError

T = TypeVar("T")


class SortKey(str, Enum):
    """Public sort keys and the portfolio attribute each one orders by."""

    CREATED_AT = "createdAt"
    VIEWS = "views"
    LIKES = "likes"

    @property
    def column(self) -> str:
        return _SORT_COLUMNS[self]


_SORT_COLUMNS = {
    SortKey.CREATED_AT: "created_at",
    SortKey.VIEWS: "view_count",
    SortKey.LIKES: "like_count",
}


@dataclass(frozen=True)
class PageRequest:
    """
    Zero-based page request ordered descending by one sort key.

    Attributes:
        page: Zero-based page index
        size: Rows per page
        sort_key: Resolved sort key
    """

    page: int
    size: int
    sort_key: SortKey

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def sort_column(self) -> str:
        return self.sort_key.column


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    A bounded, sorted slice of a larger result set.

    Attributes:
        items: Rows on this page
        page: Zero-based page index
        size: Requested page size
        total_elements: Row count across all pages
    """

    items: Sequence[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def is_empty(self) -> bool:
        return self.total_elements == 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages


def get_page_request(
    page: int,
    size: int,
    sort_by: str,
    max_page_size: int | None = None,
) -> PageRequest:
    """
    Build a descending page request from raw query parameters.

    Args:
        page: Zero-based page index
        size: Rows per page, must be positive
        sort_by: One of "createdAt", "views", "likes" (exact match)
        max_page_size: Optional upper bound on size

    Returns:
        PageRequest: Validated request

    Raises:
        InvalidSearchConditionError: If sort_by is not a known key
        ValidationError: If page is negative or size is out of range
    """
    try:
        sort_key = SortKey(sort_by)
    except ValueError as e:
        raise InvalidSearchConditionError("sort_by", sort_by) from e

    if page < 0:
        raise ValidationError(f"Page index must be >= 0, got {page}", field="page")
    if size <= 0:
        raise ValidationError(f"Page size must be > 0, got {size}", field="size")
    if max_page_size is not None and size > max_page_size:
        raise ValidationError(
            f"Page size must be <= {max_page_size}, got {size}", field="size"
        )

    return PageRequest(page=page, size=size, sort_key=sort_key)
