"""
Test suite for PortfolioCRUD paged queries and aggregate loading.

Covers ordering by each sort key with the id tiebreaker, owner filtering,
and case-insensitive substring search on owner name and title.

System role: Verification of portfolio listing and search queries
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.CRUD.attachment_crud import (
    image_attachment_crud,
    representative_attachment_crud,
)
from portfolio_backend.boundary.db.CRUD.portfolio_crud import portfolio_crud
from portfolio_backend.boundary.db.models import (
    ImageAttachmentModel,
    PortfolioModel,
    RepresentativeAttachmentModel,
)
from portfolio_backend.core.pagination import get_page_request


async def _add_portfolio(
    session: AsyncSession,
    user,
    title: str,
    view_count: int = 0,
    like_count: int = 0,
) -> PortfolioModel:
    portfolio = PortfolioModel(
        user_id=user.id,
        title=title,
        view_count=view_count,
        like_count=like_count,
    )
    session.add(portfolio)
    await session.flush()
    return portfolio


@pytest.fixture
async def catalog(test_async_db: AsyncSession, owner, other_user) -> dict[str, PortfolioModel]:
    """Four portfolios across two owners with distinct counters."""
    portfolios = {
        "alpha": await _add_portfolio(test_async_db, owner, "Alpha Service", 10, 1),
        "beta": await _add_portfolio(test_async_db, owner, "beta notes", 30, 5),
        "gamma": await _add_portfolio(test_async_db, other_user, "Gamma ALPHA port", 20, 9),
        "delta": await _add_portfolio(test_async_db, other_user, "100%_done", 0, 0),
    }
    await test_async_db.commit()
    return portfolios


class TestGetPage:
    """Test suite for PortfolioCRUD.get_page()."""

    @pytest.mark.asyncio
    async def test_orders_descending_by_views(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        # Act
        page = await portfolio_crud.get_page(test_async_db, get_page_request(0, 10, "views"))

        # Assert
        assert [p.title for p in page.items] == [
            "beta notes",
            "Gamma ALPHA port",
            "Alpha Service",
            "100%_done",
        ]
        assert page.total_elements == 4

    @pytest.mark.asyncio
    async def test_orders_descending_by_likes_with_paging(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        # Act
        first = await portfolio_crud.get_page(test_async_db, get_page_request(0, 2, "likes"))
        second = await portfolio_crud.get_page(test_async_db, get_page_request(1, 2, "likes"))

        # Assert
        assert [p.like_count for p in first.items] == [9, 5]
        assert [p.like_count for p in second.items] == [1, 0]
        assert first.has_next is True
        assert second.has_next is False

    @pytest.mark.asyncio
    async def test_equal_sort_values_fall_back_to_id_descending(
        self, test_async_db: AsyncSession, owner
    ) -> None:
        # Arrange
        tied = [await _add_portfolio(test_async_db, owner, f"tied {i}", 7) for i in range(3)]
        await test_async_db.commit()

        # Act
        page = await portfolio_crud.get_page(test_async_db, get_page_request(0, 10, "views"))

        # Assert
        expected = sorted((p.id for p in tied), key=lambda value: value.hex, reverse=True)
        assert [p.id for p in page.items] == expected

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty_but_counts_matches(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        page = await portfolio_crud.get_page(test_async_db, get_page_request(5, 10, "createdAt"))

        assert list(page.items) == []
        assert page.total_elements == 4


class TestFilteredPages:
    """Test suite for owner, owner-name and title queries."""

    @pytest.mark.asyncio
    async def test_get_page_by_user_id_returns_only_owned(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel], owner
    ) -> None:
        page = await portfolio_crud.get_page_by_user_id(
            test_async_db, owner.id, get_page_request(0, 10, "views")
        )

        assert [p.title for p in page.items] == ["beta notes", "Alpha Service"]
        assert page.total_elements == 2

    @pytest.mark.asyncio
    async def test_get_page_by_user_name_is_case_insensitive_substring(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel], other_user
    ) -> None:
        page = await portfolio_crud.get_page_by_user_name(
            test_async_db, "bob", get_page_request(0, 10, "likes")
        )

        assert page.total_elements == 2
        assert all(p.user_id == other_user.id for p in page.items)

    @pytest.mark.asyncio
    async def test_get_page_by_title_is_case_insensitive_substring(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        page = await portfolio_crud.get_page_by_title(
            test_async_db, "alpha", get_page_request(0, 10, "views")
        )

        assert [p.title for p in page.items] == ["Gamma ALPHA port", "Alpha Service"]

    @pytest.mark.asyncio
    async def test_title_search_escapes_like_wildcards(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        # Act
        literal = await portfolio_crud.get_page_by_title(
            test_async_db, "0%_", get_page_request(0, 10, "views")
        )
        wildcard = await portfolio_crud.get_page_by_title(
            test_async_db, "%", get_page_request(0, 10, "views")
        )

        # Assert
        assert [p.title for p in literal.items] == ["100%_done"]
        assert wildcard.total_elements == 1

    @pytest.mark.asyncio
    async def test_no_match_gives_empty_page(
        self, test_async_db: AsyncSession, catalog: dict[str, PortfolioModel]
    ) -> None:
        page = await portfolio_crud.get_page_by_title(
            test_async_db, "Foo", get_page_request(0, 10, "views")
        )

        assert page.is_empty is True


class TestAggregateAndAttachments:
    """Test suite for get_aggregate() and attachment URL listings."""

    @pytest.mark.asyncio
    async def test_get_aggregate_loads_attachments(
        self, test_async_db: AsyncSession, owner
    ) -> None:
        # Arrange
        portfolio = PortfolioModel(
            user_id=owner.id,
            title="With media",
            representative_attachment=RepresentativeAttachmentModel(url="https://b/images/r.png"),
            image_attachments=[
                ImageAttachmentModel(url="https://b/images/g1.png"),
                ImageAttachmentModel(url="https://b/images/g2.png"),
            ],
        )
        test_async_db.add(portfolio)
        await test_async_db.commit()

        # Act
        loaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)

        # Assert
        assert loaded.representative_attachment.url == "https://b/images/r.png"
        assert loaded.representative_attachment.portfolio_id == portfolio.id
        assert {a.url for a in loaded.image_attachments} == {
            "https://b/images/g1.png",
            "https://b/images/g2.png",
        }
        assert await representative_attachment_crud.get_all_urls(test_async_db) == {
            "https://b/images/r.png"
        }
        assert await image_attachment_crud.get_all_urls(test_async_db) == {
            "https://b/images/g1.png",
            "https://b/images/g2.png",
        }

    @pytest.mark.asyncio
    async def test_delete_cascades_to_attachment_rows(
        self, test_async_db: AsyncSession, owner
    ) -> None:
        # Arrange
        portfolio = PortfolioModel(
            user_id=owner.id,
            title="Doomed",
            image_attachments=[ImageAttachmentModel(url="https://b/images/g.png")],
        )
        test_async_db.add(portfolio)
        await test_async_db.commit()
        loaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)

        # Act
        await portfolio_crud.delete(test_async_db, loaded)
        await test_async_db.commit()

        # Assert
        assert await portfolio_crud.get_aggregate(test_async_db, portfolio.id) is None
        assert await image_attachment_crud.get_all_urls(test_async_db) == set()
