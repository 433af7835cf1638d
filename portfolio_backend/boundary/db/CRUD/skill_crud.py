"""
Skill catalog CRUD operations.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.models
System role: Skill name resolution and catalog seeding
"""

from typing import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.models.skill_model import SkillModel
from portfolio_backend.boundary.db.CRUD.base_crud import BaseCRUD


class SkillCRUD(BaseCRUD[SkillModel]):
    """
    CRUD operations for the skill catalog.

    Catalog names are stored upper case; lookups expect normalized names.
    """

    def __init__(self) -> None:
        """Initialize SkillCRUD with SkillModel."""
        super().__init__(SkillModel)

    async def get_by_name(self, session: AsyncSession, name: str) -> SkillModel | None:
        """
        Retrieve a catalog skill by its canonical name.

        Args:
            session: Async database session
            name: Upper-case skill name

        Returns:
            SkillModel if found, None otherwise
        """
        stmt = select(SkillModel).where(SkillModel.name == name)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def ensure_names(
        self,
        session: AsyncSession,
        names: Iterable[str],
    ) -> Sequence[SkillModel]:
        """
        Insert any missing catalog names and return all of them.

        Args:
            session: Async database session
            names: Skill names in any case

        Returns:
            Catalog rows for the given names, in input order without duplicates
        """
        skills: dict[str, SkillModel] = {}
        for raw in names:
            name = raw.strip().upper()
            if not name or name in skills:
                continue
            skill = await self.get_by_name(session, name)
            if skill is None:
                skill = await self.create(session, name=name)
            skills[name] = skill
        return list(skills.values())


skill_crud = SkillCRUD()
