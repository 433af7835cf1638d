"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - PortfolioModel, attachment models, skill models, UserModel: Domain entities
  - portfolio_crud, attachment/skill/user CRUD singletons

Dependencies: sqlalchemy, portfolio_backend.configs
System role: Relational store adapter for portfolios, their attachments and skills.
"""

from portfolio_backend.boundary.db.base import Base, TimestampMixin, UUIDMixin
from portfolio_backend.boundary.db.connection import (
    get_async_engine,
    get_async_session_factory,
)
from portfolio_backend.boundary.db.models import (
    ImageAttachmentModel,
    PortfolioModel,
    PortfolioSkillModel,
    RepresentativeAttachmentModel,
    SkillModel,
    UserModel,
)
from portfolio_backend.boundary.db.CRUD import (
    BaseCRUD,
    ImageAttachmentCRUD,
    PortfolioCRUD,
    RepresentativeAttachmentCRUD,
    SkillCRUD,
    UserCRUD,
    image_attachment_crud,
    portfolio_crud,
    representative_attachment_crud,
    skill_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "PortfolioModel",
    "RepresentativeAttachmentModel",
    "ImageAttachmentModel",
    "SkillModel",
    "PortfolioSkillModel",
    "UserModel",
    # CRUD classes
    "BaseCRUD",
    "PortfolioCRUD",
    "RepresentativeAttachmentCRUD",
    "ImageAttachmentCRUD",
    "SkillCRUD",
    "UserCRUD",
    # CRUD singletons
    "portfolio_crud",
    "representative_attachment_crud",
    "image_attachment_crud",
    "skill_crud",
    "user_crud",
]
