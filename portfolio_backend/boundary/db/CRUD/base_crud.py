"""
Shared CRUD helpers for portfolio tables.

Model-specific CRUD classes inherit insert, primary-key lookup, full
listing, cascading delete and single-column reads from BaseCRUD.

Dependencies: sqlalchemy
System role: Common persistence operations for the portfolio schema
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from portfolio_backend.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Persistence helpers bound to one ORM model.

    Nothing here commits. PortfolioService owns the unit of work, and
    seed scripts commit their own session.

    Attributes:
        model: ORM class the helpers operate on
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **values: Any) -> ModelT:
        """
        Insert a row and flush it so the generated id and timestamps are set.

        Args:
            session: Async database session
            **values: Column values

        Returns:
            The pending instance, flushed but not committed
        """
        instance = self.model(**values)
        session.add(instance)
        await session.flush()
        return instance

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        """Primary-key lookup through the identity map."""
        return await session.get(self.model, id)

    async def get_all(self, session: AsyncSession) -> Sequence[ModelT]:
        """Every row of the table, unordered."""
        result = await session.execute(select(self.model))
        return result.scalars().all()

    async def delete(self, session: AsyncSession, instance: ModelT) -> None:
        """
        Delete a loaded instance through the ORM.

        Going through the session applies relationship cascades, so a
        portfolio takes its attachment rows and skill links with it.
        """
        await session.delete(instance)
        await session.flush()

    async def distinct_values(
        self,
        session: AsyncSession,
        column: InstrumentedAttribute,
    ) -> set[Any]:
        """
        Read one column of every row as a set.

        Args:
            session: Async database session
            column: Mapped attribute of this model, e.g. ImageAttachmentModel.url

        Returns:
            Distinct column values
        """
        result = await session.execute(select(column).distinct())
        return set(result.scalars().all())
