"""
Skill catalog and portfolio-skill association ORM models.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.base
System role: Skill catalog lookups and portfolio skill sets
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin

if TYPE_CHECKING:
    from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel


class SkillModel(Base, UUIDMixin, TimestampMixin):
    """
    Canonical skill in the catalog.

    Attributes:
        id: UUID primary key (auto-generated)
        name: Unique upper-case skill name (e.g. "PYTHON")
    """

    __tablename__ = "skills"

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        doc="Upper-case canonical name",
    )


class PortfolioSkillModel(Base, UUIDMixin, TimestampMixin):
    """
    Association between a portfolio and a catalog skill.

    Attributes:
        id: UUID primary key (auto-generated)
        portfolio_id: Owning portfolio
        skill_id: Associated catalog skill

    Constraints:
        (portfolio_id, skill_id): unique, a skill appears once per portfolio
    """

    __tablename__ = "portfolio_skills"
    __table_args__ = (
        UniqueConstraint("portfolio_id", "skill_id", name="uq_portfolio_skill"),
    )

    portfolio_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("portfolios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    skill_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("skills.id", ondelete="CASCADE"),
        nullable=False,
    )

    portfolio: Mapped[PortfolioModel] = relationship(back_populates="skills")
    skill: Mapped[SkillModel] = relationship(lazy="selectin")
