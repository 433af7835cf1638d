"""
Attachment CRUD operations.

Image rows are written through the PortfolioModel relationships; the
queries here serve the orphaned blob sweep, which needs every URL the
relational store still references.

Dependencies: sqlalchemy, portfolio_backend.boundary.db.models
System role: Image reference reads
"""

from typing import TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.models.attachment_model import (
    ImageAttachmentModel,
    RepresentativeAttachmentModel,
)
from portfolio_backend.boundary.db.CRUD.base_crud import BaseCRUD

AttachmentT = TypeVar("AttachmentT", RepresentativeAttachmentModel, ImageAttachmentModel)


class AttachmentCRUD(BaseCRUD[AttachmentT]):
    """URL reads shared by both attachment tables."""

    async def get_all_urls(self, session: AsyncSession) -> set[str]:
        """Return every image URL referenced by this table."""
        return await self.distinct_values(session, self.model.url)


class RepresentativeAttachmentCRUD(AttachmentCRUD[RepresentativeAttachmentModel]):
    """Representative image rows, at most one per portfolio."""

    def __init__(self) -> None:
        super().__init__(RepresentativeAttachmentModel)


class ImageAttachmentCRUD(AttachmentCRUD[ImageAttachmentModel]):
    """Gallery image rows."""

    def __init__(self) -> None:
        super().__init__(ImageAttachmentModel)


representative_attachment_crud = RepresentativeAttachmentCRUD()
image_attachment_crud = ImageAttachmentCRUD()
