"""
Attachment ORM models.

Relational records pointing at blob store objects, each scoped to
exactly one portfolio.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.base
System role: Image reference persistence
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from portfolio_backend.boundary.db.base import Base, UUIDMixin, TimestampMixin

if TYPE_CHECKING:
    from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel


class RepresentativeAttachmentModel(Base, UUIDMixin, TimestampMixin):
    """
    The single representative image of a portfolio.

    Attributes:
        id: UUID primary key (auto-generated)
        portfolio_id: Owning portfolio (unique, at most one per portfolio)
        url: Blob store URL of the image

    Constraints:
        portfolio_id: Foreign key ON DELETE CASCADE to portfolios.id, unique
    """

    __tablename__ = "representative_attachments"

    portfolio_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("portfolios.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        doc="Portfolio this image represents",
    )

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        doc="Blob store URL",
    )

    portfolio: Mapped[PortfolioModel] = relationship(
        back_populates="representative_attachment",
    )


class ImageAttachmentModel(Base, UUIDMixin, TimestampMixin):
    """
    One gallery image of a portfolio.

    Attributes:
        id: UUID primary key (auto-generated)
        portfolio_id: Owning portfolio
        url: Blob store URL of the image

    Constraints:
        portfolio_id: Foreign key ON DELETE CASCADE to portfolios.id
    """

    __tablename__ = "image_attachments"

    portfolio_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("portfolios.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Portfolio this image belongs to",
    )

    url: Mapped[str] = mapped_column(
        String(2048),
        nullable=False,
        doc="Blob store URL",
    )

    portfolio: Mapped[PortfolioModel] = relationship(
        back_populates="image_attachments",
    )
