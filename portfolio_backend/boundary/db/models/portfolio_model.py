"""
Portfolio ORM model.

Aggregate root for a user's portfolio: text fields, counters, and the
attachments and skill associations it exclusively owns.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.base
System role: Portfolio persistence
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin
from portfolio_backend.boundary.db.models.attachment_model import (
    ImageAttachmentModel,
    RepresentativeAttachmentModel,
)
from portfolio_backend.boundary.db.models.skill_model import PortfolioSkillModel
from portfolio_backend.boundary.db.models.user_model import UserModel


class PortfolioModel(Base, UUIDMixin, TimestampMixin):
    """
    Portfolio ORM model.

    Child collections are loaded eagerly (selectin) so aggregates can be
    used outside the session's async context. Deleting a portfolio deletes
    its attachment rows and skill associations; blob objects are not
    touched.

    Attributes:
        id: UUID primary key (auto-generated)
        user_id: Owning user (referenced, not owned)
        title: Portfolio title
        description: Optional summary
        git_link: Optional repository link
        content: Optional free-form body
        view_count: Monotonic view counter
        like_count: Signed like counter
        created_at: Creation timestamp (UTC), sort key "createdAt"
        updated_at: Last modification timestamp (UTC)

    Relationships:
        user: Owning UserModel
        representative_attachment: Zero or one RepresentativeAttachmentModel
        image_attachments: Gallery ImageAttachmentModel rows
        skills: PortfolioSkillModel associations
    """

    __tablename__ = "portfolios"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning user",
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    git_link: Mapped[str | None] = mapped_column(String(1024), nullable=True, default=None)
    content: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)

    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    like_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    # Relationships
    user: Mapped[UserModel] = relationship(lazy="selectin")
    representative_attachment: Mapped[RepresentativeAttachmentModel | None] = relationship(
        back_populates="portfolio",
        cascade="all, delete-orphan",
        uselist=False,
        lazy="selectin",
    )
    image_attachments: Mapped[list[ImageAttachmentModel]] = relationship(
        back_populates="portfolio",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    skills: Mapped[list[PortfolioSkillModel]] = relationship(
        back_populates="portfolio",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def skill_names(self) -> list[str]:
        """Catalog names of the associated skills, in association order."""
        return [association.skill.name for association in self.skills]
