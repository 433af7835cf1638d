"""
Skill reconciler.

Replaces a portfolio's skill set from a list of names: every existing
association is dropped and the set is rebuilt from the catalog.

Dependencies: sqlalchemy, portfolio_backend.boundary.db
System role: Skill set maintenance for portfolio create/update
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.CRUD.skill_crud import skill_crud
from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel
from portfolio_backend.boundary.db.models.skill_model import PortfolioSkillModel, SkillModel
from portfolio_backend.core.exceptions import (
    MissingSkillsError,
    UnknownSkillError,
    ValidationError,
)

logger = logging.getLogger(__name__)


class SkillReconciler:
    """Delete-all-then-recreate maintenance of portfolio skill associations."""

    def __init__(self, db: AsyncSession) -> None:
        """
        Initialize reconciler.

        Args:
            db: Async SQLAlchemy session shared with the calling service
        """
        self.db = db

    async def resolve(self, skill_names: Sequence[str] | None) -> list[SkillModel]:
        """
        Resolve skill names against the catalog.

        Names are stripped and upper-cased before lookup. Repeated names
        collapse to one skill, keeping the first occurrence.

        Args:
            skill_names: Names in any case; an empty list is valid

        Returns:
            list[SkillModel]: Distinct catalog skills in input order

        Raises:
            MissingSkillsError: If skill_names is None
            UnknownSkillError: If any name is not in the catalog
            ValidationError: If a name is not a string or is blank
        """
        if skill_names is None:
            raise MissingSkillsError()

        resolved: dict = {}
        for raw_name in skill_names:
            if not isinstance(raw_name, str) or not raw_name.strip():
                raise ValidationError(
                    f"Skill names must be non-blank strings, got {raw_name!r}",
                    field="skill_names",
                )
            name = raw_name.strip().upper()
            skill = await skill_crud.get_by_name(self.db, name)
            if skill is None:
                raise UnknownSkillError(name)
            resolved.setdefault(skill.id, skill)
        return list(resolved.values())

    async def apply(self, portfolio: PortfolioModel, skills: Sequence[SkillModel]) -> None:
        """
        Replace the portfolio's associations with the given skills.

        Existing associations are always deleted, even when the new set
        is identical.

        Args:
            portfolio: Persistent portfolio aggregate
            skills: Distinct catalog skills
        """
        removed = len(portfolio.skills)
        # delete-orphan turns each removal into a row delete at flush
        for association in list(portfolio.skills):
            portfolio.skills.remove(association)
        await self.db.flush()

        for skill in skills:
            portfolio.skills.append(PortfolioSkillModel(skill=skill))
        await self.db.flush()

        logger.debug(
            f"{__name__}:apply - Reconciled skills",
            extra={
                "portfolio_id": str(portfolio.id),
                "removed": removed,
                "added": len(skills),
            },
        )

    async def reconcile(
        self,
        portfolio: PortfolioModel,
        skill_names: Sequence[str] | None,
    ) -> None:
        """
        Resolve names and replace the portfolio's skill set.

        Raises:
            MissingSkillsError: If skill_names is None
            UnknownSkillError: If any name is not in the catalog
        """
        skills = await self.resolve(skill_names)
        await self.apply(portfolio, skills)
