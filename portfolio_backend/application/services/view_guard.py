"""
Duplicate-view suppression.

Optional collaborator for PortfolioService.increment_view_count. Without
one, every call counts.

Dependencies: None
System role: Pluggable view rate limiting
"""

from datetime import datetime, timedelta
from typing import Any, Callable, Hashable, Protocol, runtime_checkable


@runtime_checkable
class ViewCountGuard(Protocol):
    """Decides whether a view should increment a portfolio's counter."""

    async def should_count(self, portfolio_id: Any, viewer_key: Hashable | None) -> bool:
        ...


def _next_midnight(now: datetime) -> datetime:
    return (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


class DailyViewGuard:
    """
    Count each viewer once per portfolio until the next local midnight.

    In-memory and per process. Anonymous views (viewer_key None) always
    count.
    """

    def __init__(self, clock: Callable[[], datetime] = datetime.now) -> None:
        self._clock = clock
        self._seen: dict[tuple[Any, Hashable], datetime] = {}

    async def should_count(self, portfolio_id: Any, viewer_key: Hashable | None) -> bool:
        if viewer_key is None:
            return True

        now = self._clock()
        self._prune(now)

        key = (portfolio_id, viewer_key)
        if key in self._seen:
            return False
        self._seen[key] = _next_midnight(now)
        return True

    def _prune(self, now: datetime) -> None:
        expired = [key for key, expires_at in self._seen.items() if expires_at <= now]
        for key in expired:
            del self._seen[key]
