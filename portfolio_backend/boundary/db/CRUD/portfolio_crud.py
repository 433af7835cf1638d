"""
Portfolio CRUD operations.

Provides aggregate lookups and the paged, sorted queries behind
owner listing and search.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.models, portfolio_backend.core
System role: Portfolio persistence operations
"""

from uuid import UUID

from sqlalchemy import ColumnElement, desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel
from portfolio_backend.boundary.db.models.user_model import UserModel
from portfolio_backend.boundary.db.CRUD.base_crud import BaseCRUD
from portfolio_backend.core.pagination import Page, PageRequest


class PortfolioCRUD(BaseCRUD[PortfolioModel]):
    """
    CRUD operations for PortfolioModel.

    Extends BaseCRUD with aggregate reloads and paged queries filtered
    by owner id, owner display name, or title. Every page is ordered
    descending by the requested sort column, then by id, so equal sort
    values still page deterministically.
    """

    def __init__(self) -> None:
        """Initialize PortfolioCRUD with PortfolioModel."""
        super().__init__(PortfolioModel)

    async def get_aggregate(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> PortfolioModel | None:
        """
        Retrieve a portfolio with attachments and skills freshly loaded.

        populate_existing overwrites any stale identity-map state, e.g.
        after a rolled back unit of work.

        Args:
            session: Async database session
            id: Portfolio UUID

        Returns:
            PortfolioModel if found, None otherwise
        """
        stmt = (
            select(PortfolioModel)
            .where(PortfolioModel.id == id)
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_page(
        self,
        session: AsyncSession,
        page_request: PageRequest,
    ) -> Page[PortfolioModel]:
        """
        Retrieve one page of all portfolios.

        Args:
            session: Async database session
            page_request: Validated page and sort

        Returns:
            Page of PortfolioModels (possibly empty)
        """
        return await self._get_page(session, page_request)

    async def get_page_by_user_id(
        self,
        session: AsyncSession,
        user_id: UUID,
        page_request: PageRequest,
    ) -> Page[PortfolioModel]:
        """
        Retrieve one page of portfolios owned by a user.

        Args:
            session: Async database session
            user_id: Owner UUID
            page_request: Validated page and sort

        Returns:
            Page of PortfolioModels (possibly empty)
        """
        return await self._get_page(
            session, page_request, PortfolioModel.user_id == user_id
        )

    async def get_page_by_user_name(
        self,
        session: AsyncSession,
        user_name: str,
        page_request: PageRequest,
    ) -> Page[PortfolioModel]:
        """
        Retrieve one page of portfolios whose owner name contains a value.

        Matching is a case-insensitive substring match with LIKE
        wildcards in the value escaped.

        Args:
            session: Async database session
            user_name: Substring of the owner's display name
            page_request: Validated page and sort

        Returns:
            Page of PortfolioModels (possibly empty)
        """
        return await self._get_page(
            session,
            page_request,
            UserModel.name.icontains(user_name, autoescape=True),
            join_user=True,
        )

    async def get_page_by_title(
        self,
        session: AsyncSession,
        title: str,
        page_request: PageRequest,
    ) -> Page[PortfolioModel]:
        """
        Retrieve one page of portfolios whose title contains a value.

        Args:
            session: Async database session
            title: Case-insensitive substring of the title
            page_request: Validated page and sort

        Returns:
            Page of PortfolioModels (possibly empty)
        """
        return await self._get_page(
            session,
            page_request,
            PortfolioModel.title.icontains(title, autoescape=True),
        )

    async def _get_page(
        self,
        session: AsyncSession,
        page_request: PageRequest,
        *criteria: ColumnElement[bool],
        join_user: bool = False,
    ) -> Page[PortfolioModel]:
        sort_column = getattr(PortfolioModel, page_request.sort_column)

        count_stmt = select(func.count(PortfolioModel.id)).select_from(PortfolioModel)
        stmt = select(PortfolioModel)
        if join_user:
            count_stmt = count_stmt.join(UserModel, PortfolioModel.user_id == UserModel.id)
            stmt = stmt.join(UserModel, PortfolioModel.user_id == UserModel.id)
        if criteria:
            count_stmt = count_stmt.where(*criteria)
            stmt = stmt.where(*criteria)

        stmt = (
            stmt.order_by(desc(sort_column), desc(PortfolioModel.id))
            .offset(page_request.offset)
            .limit(page_request.size)
        )

        total = (await session.execute(count_stmt)).scalar_one()
        result = await session.execute(stmt)
        return Page(
            items=list(result.scalars().all()),
            page=page_request.page,
            size=page_request.size,
            total_elements=total,
        )


portfolio_crud = PortfolioCRUD()
