"""ORM models package."""

from portfolio_backend.boundary.db.models.attachment_model import (
    ImageAttachmentModel,
    RepresentativeAttachmentModel,
)
from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel
from portfolio_backend.boundary.db.models.skill_model import PortfolioSkillModel, SkillModel
from portfolio_backend.boundary.db.models.user_model import UserModel

__all__ = [
    "ImageAttachmentModel",
    "PortfolioModel",
    "PortfolioSkillModel",
    "RepresentativeAttachmentModel",
    "SkillModel",
    "UserModel",
]
