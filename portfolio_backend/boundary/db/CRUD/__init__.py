"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from portfolio_backend.boundary.db.CRUD import portfolio_crud, skill_crud

    # Use singleton instances
    portfolio = await portfolio_crud.get_aggregate(db, portfolio_id)

    # Or instantiate classes directly for custom behavior
    from portfolio_backend.boundary.db.CRUD import PortfolioCRUD
    custom_crud = PortfolioCRUD()
"""

from portfolio_backend.boundary.db.CRUD.base_crud import BaseCRUD
from portfolio_backend.boundary.db.CRUD.attachment_crud import (
    AttachmentCRUD,
    ImageAttachmentCRUD,
    RepresentativeAttachmentCRUD,
    image_attachment_crud,
    representative_attachment_crud,
)
from portfolio_backend.boundary.db.CRUD.portfolio_crud import PortfolioCRUD, portfolio_crud
from portfolio_backend.boundary.db.CRUD.skill_crud import SkillCRUD, skill_crud
from portfolio_backend.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "AttachmentCRUD",
    "PortfolioCRUD",
    "portfolio_crud",
    "RepresentativeAttachmentCRUD",
    "representative_attachment_crud",
    "ImageAttachmentCRUD",
    "image_attachment_crud",
    "SkillCRUD",
    "skill_crud",
    "UserCRUD",
    "user_crud",
]
