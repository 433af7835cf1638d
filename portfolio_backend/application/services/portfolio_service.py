"""
Portfolio service orchestrator.

Coordinates portfolio lifecycle operations across the relational store
and the blob store. Each mutating operation is one unit of work: the
session commits on success, and on failure it rolls back and deletes
the blobs uploaded during the failed call.

Dependencies: sqlalchemy, portfolio_backend.boundary, portfolio_backend.core
System role: Portfolio use case orchestration
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Hashable, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.application.services.attachment_manager import AttachmentManager
from portfolio_backend.application.services.skill_reconciler import SkillReconciler
from portfolio_backend.application.services.view_guard import ViewCountGuard
from portfolio_backend.boundary.aws.blob_store import BlobStore
from portfolio_backend.boundary.db.CRUD.portfolio_crud import portfolio_crud
from portfolio_backend.boundary.db.CRUD.user_crud import user_crud
from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel
from portfolio_backend.boundary.db.models.user_model import UserModel
from portfolio_backend.configs import PortfolioSettings, get_settings
from portfolio_backend.core.exceptions import (
    InvalidSearchConditionError,
    NoPortfoliosMatchedError,
    PermissionDeniedError,
    PortfolioNotFoundError,
    PortfolioServiceException,
    StorageError,
)
from portfolio_backend.core.pagination import Page, PageRequest, get_page_request
from portfolio_backend.models.portfolio import PortfolioCreate, PortfolioUpdate
from portfolio_backend.models.upload import ImageUpload
from portfolio_backend.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Portfolio service orchestrator.

    Verifies ownership, delegates media to AttachmentManager and skills to
    SkillReconciler, and owns the session transaction. CRUD helpers never
    commit; this class does.
    """

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        settings: PortfolioSettings | None = None,
        view_guard: ViewCountGuard | None = None,
    ) -> None:
        """
        Initialize portfolio service.

        Args:
            db: Async SQLAlchemy session
            blob_store: Blob store for portfolio images
            settings: Portfolio settings (application settings if None)
            view_guard: Duplicate-view suppression; every view counts if None
        """
        self.db = db
        self.blob_store = blob_store
        self.settings = settings or get_settings().portfolio
        self.view_guard = view_guard
        self.attachments = AttachmentManager(
            db,
            blob_store,
            folder=self.settings.image_folder,
            gallery_policy=self.settings.gallery_upload_policy,
        )
        self.skills = SkillReconciler(db)

    async def create(
        self,
        portfolio: PortfolioCreate,
        skill_names: Sequence[str] | None,
        representative_image: ImageUpload | None = None,
        gallery_images: Sequence[ImageUpload] | None = None,
    ) -> PortfolioModel:
        """
        Create a portfolio with its images and skills.

        Skills are resolved before any upload, so a bad skill list never
        leaves blobs behind.

        Args:
            portfolio: Scalar fields and owning user
            skill_names: Skill names in any case; None is rejected
            representative_image: Optional representative image
            gallery_images: Optional gallery images

        Returns:
            PortfolioModel: Persisted aggregate with generated id

        Raises:
            PermissionDeniedError: If the user does not exist
            MissingSkillsError: If skill_names is None
            UnknownSkillError: If a skill name is not in the catalog
            StorageError: If an upload fails
        """
        async with self._unit_of_work("create", user_id=portfolio.user_id):
            user = await self._verify_owner(portfolio.user_id, "create")
            skills = await self.skills.resolve(skill_names)

            entity = PortfolioModel(
                user=user,
                title=portfolio.title,
                description=portfolio.description,
                git_link=portfolio.git_link,
                content=portfolio.content,
                view_count=0,
                like_count=0,
                representative_attachment=None,
                image_attachments=[],
                skills=[],
            )
            await self.attachments.attach_representative(entity, representative_image)
            gallery = await self.attachments.attach_gallery(entity, gallery_images)

            self.db.add(entity)
            await self.db.flush()
            await self.skills.apply(entity, skills)

            created = await self._reload(entity.id)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:create - Portfolio created",
            portfolio_id=created.id,
            user_id=created.user_id,
            gallery_size=len(gallery.attached_urls),
            skills=created.skill_names,
        )
        return created

    async def update(
        self,
        portfolio: PortfolioUpdate,
        portfolio_id: UUID,
        skill_names: Sequence[str] | None,
        representative_image: ImageUpload | None = None,
        gallery_images: Sequence[ImageUpload] | None = None,
        *,
        clear_representative: bool = False,
    ) -> PortfolioModel:
        """
        Patch a portfolio, replace its media, and rebuild its skill set.

        Scalar fields left as None keep their value. The representative
        image is replaced only by a non-empty file, or removed when
        clear_representative is set. The gallery is replaced wholesale only
        by a non-empty list. Skills are always rebuilt.

        Args:
            portfolio: Patch and acting user
            portfolio_id: Target portfolio UUID
            skill_names: Skill names in any case; None is rejected
            representative_image: Replacement representative image
            gallery_images: Replacement gallery
            clear_representative: Remove the representative image when no
                replacement is given

        Returns:
            PortfolioModel: Updated aggregate

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
            PermissionDeniedError: If the user does not exist or is not the owner
            MissingSkillsError: If skill_names is None
            UnknownSkillError: If a skill name is not in the catalog
            StorageError: If a blob delete or upload fails
        """
        async with self._unit_of_work(
            "update", portfolio_id=portfolio_id, user_id=portfolio.user_id
        ):
            entity = await self._find_verified(portfolio_id, portfolio.user_id, "update")
            skills = await self.skills.resolve(skill_names)

            for field, value in portfolio.changed_fields().items():
                setattr(entity, field, value)

            has_representative = (
                representative_image is not None and not representative_image.is_empty
            )
            new_gallery = [image for image in gallery_images or [] if not image.is_empty]
            if has_representative or clear_representative or new_gallery:
                change = await self.attachments.replace_media(
                    entity,
                    representative=representative_image if has_representative else None,
                    swap_representative=has_representative or clear_representative,
                    gallery=new_gallery or None,
                )
                if change.gallery.is_partial:
                    logger.warning(
                        f"{__name__}:update - Gallery partially replaced",
                        extra={
                            "portfolio_id": str(portfolio_id),
                            "failed_uploads": change.gallery.failed_uploads,
                        },
                    )

            await self.skills.apply(entity, skills)
            await self.db.flush()

            updated = await self._reload(portfolio_id)

        logger.info(
            f"{__name__}:update - Portfolio updated",
            extra={"portfolio_id": str(portfolio_id)},
        )
        return updated

    async def delete(self, portfolio_id: UUID, user_id: UUID) -> None:
        """
        Delete a portfolio with its attachment rows and skill associations.

        Blob objects are not deleted here; the orphan sweep reclaims them.

        Args:
            portfolio_id: Target portfolio UUID
            user_id: Acting user, must be the owner

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
            PermissionDeniedError: If the user does not exist or is not the owner
        """
        async with self._unit_of_work("delete", portfolio_id=portfolio_id, user_id=user_id):
            entity = await self._find_verified(portfolio_id, user_id, "delete")
            urls = [attachment.url for attachment in entity.image_attachments]
            if entity.representative_attachment is not None:
                urls.append(entity.representative_attachment.url)

            await portfolio_crud.delete(self.db, entity)

        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:delete - Portfolio deleted, blobs left for sweep",
            portfolio_id=portfolio_id,
            blob_count=len(urls),
            blob_urls=urls,
        )

    async def find(self, portfolio_id: UUID) -> PortfolioModel:
        """
        Get a portfolio aggregate by ID.

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
        """
        return await self._reload(portfolio_id)

    async def find_all(self) -> Sequence[PortfolioModel]:
        """Get every portfolio, in no particular order."""
        return await portfolio_crud.get_all(self.db)

    async def find_page(
        self,
        page: int,
        size: int,
        sort_key: str = "createdAt",
    ) -> Page[PortfolioModel]:
        """
        Get one page of all portfolios, newest or most popular first.

        An empty page is returned as is.

        Raises:
            InvalidSearchConditionError: If sort_key is unknown
            ValidationError: If page or size is out of range
        """
        page_request = self._page_request(page, size, sort_key)
        return await portfolio_crud.get_page(self.db, page_request)

    async def list_by_owner(
        self,
        user_id: UUID,
        sort_key: str,
        page: int,
        size: int,
    ) -> Page[PortfolioModel]:
        """
        Get one page of a user's portfolios.

        Args:
            user_id: Owner UUID
            sort_key: "createdAt", "views" or "likes"
            page: Zero-based page index
            size: Rows per page

        Returns:
            Page[PortfolioModel]: Matching portfolios, descending

        Raises:
            InvalidSearchConditionError: If sort_key is unknown
            ValidationError: If page or size is out of range
            NoPortfoliosMatchedError: If the user owns no portfolios
        """
        page_request = self._page_request(page, size, sort_key)
        result = await portfolio_crud.get_page_by_user_id(self.db, user_id, page_request)
        if result.is_empty:
            raise NoPortfoliosMatchedError({"user_id": str(user_id)})
        return result

    async def search(
        self,
        page: int,
        size: int,
        category: str,
        sort_key: str,
        value: str,
    ) -> Page[PortfolioModel]:
        """
        Search portfolios by owner name or title.

        Both categories match a case-insensitive substring.

        Args:
            page: Zero-based page index
            size: Rows per page
            category: Exactly "userName" or "title"
            sort_key: "createdAt", "views" or "likes"
            value: Substring to look for

        Returns:
            Page[PortfolioModel]: Matching portfolios, descending

        Raises:
            InvalidSearchConditionError: If category or sort_key is unknown
            ValidationError: If page or size is out of range
            NoPortfoliosMatchedError: If nothing matches
        """
        page_request = self._page_request(page, size, sort_key)

        if category == "userName":
            result = await portfolio_crud.get_page_by_user_name(self.db, value, page_request)
        elif category == "title":
            result = await portfolio_crud.get_page_by_title(self.db, value, page_request)
        else:
            raise InvalidSearchConditionError("category", category)

        if result.is_empty:
            raise NoPortfoliosMatchedError({"category": category, "value": value})
        return result

    async def adjust_like_count(self, portfolio_id: UUID, delta: int) -> PortfolioModel:
        """
        Add a signed delta to the like counter. The counter may go negative.

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
        """
        async with self._unit_of_work("adjust_like_count", portfolio_id=portfolio_id):
            entity = await self._reload(portfolio_id)
            entity.like_count += delta
            await self.db.flush()
        return entity

    async def increment_view_count(
        self,
        portfolio_id: UUID,
        viewer_key: Hashable | None = None,
    ) -> PortfolioModel:
        """
        Count one view.

        With a view guard configured, a repeat view by the same viewer
        inside the guard's window leaves the counter unchanged.

        Args:
            portfolio_id: Viewed portfolio UUID
            viewer_key: Opaque viewer identity; None is always counted

        Returns:
            PortfolioModel: Portfolio with its current view count

        Raises:
            PortfolioNotFoundError: If the portfolio does not exist
        """
        async with self._unit_of_work("increment_view_count", portfolio_id=portfolio_id):
            entity = await self._reload(portfolio_id)
            if self.view_guard is None or await self.view_guard.should_count(
                portfolio_id, viewer_key
            ):
                entity.view_count += 1
                await self.db.flush()
        return entity

    @asynccontextmanager
    async def _unit_of_work(self, operation: str, **context) -> AsyncIterator[None]:
        try:
            yield
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            leftover = await self.attachments.discard_pending_uploads()

            if leftover:
                context["orphaned_urls"] = leftover

            if isinstance(e, StorageError):
                level, message, exc_info = logging.WARNING, f"Rolled back: {e}", False
            elif isinstance(e, PortfolioServiceException):
                level, message, exc_info = logging.INFO, f"Rejected: {e}", False
            else:
                level, message, exc_info = logging.ERROR, "Unexpected failure, rolled back", True
            log_with_context(
                logger,
                level,
                f"{__name__}:{operation} - {message}",
                exc_info=exc_info,
                operation=operation,
                **context,
            )
            raise

        self.attachments.commit_pending()

    def _page_request(self, page: int, size: int, sort_key: str) -> PageRequest:
        return get_page_request(page, size, sort_key, max_page_size=self.settings.max_page_size)

    async def _reload(self, portfolio_id: UUID) -> PortfolioModel:
        portfolio = await portfolio_crud.get_aggregate(self.db, portfolio_id)
        if portfolio is None:
            raise PortfolioNotFoundError(portfolio_id)
        return portfolio

    async def _find_verified(
        self,
        portfolio_id: UUID,
        user_id: UUID,
        action: str,
    ) -> PortfolioModel:
        portfolio = await self._reload(portfolio_id)
        await self._verify_owner(user_id, action, portfolio)
        return portfolio

    async def _verify_owner(
        self,
        user_id: UUID,
        action: str,
        portfolio: PortfolioModel | None = None,
    ) -> UserModel:
        """
        Check that the user exists and, for an existing portfolio, owns it.

        Raises:
            PermissionDeniedError: reason "user_not_found" or "not_owner"
        """
        portfolio_id = portfolio.id if portfolio is not None else None

        user = await user_crud.get_by_id(self.db, user_id)
        if user is None:
            raise PermissionDeniedError(
                action, user_id=user_id, portfolio_id=portfolio_id, reason="user_not_found"
            )
        if portfolio is not None and portfolio.user_id != user.id:
            raise PermissionDeniedError(
                action, user_id=user_id, portfolio_id=portfolio_id, reason="not_owner"
            )
        return user
