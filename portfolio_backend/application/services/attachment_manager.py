"""
Attachment manager.

Keeps a portfolio's image rows and the blob store in lockstep when
representative or gallery images are attached, replaced or removed.

Ordering rules:
- An old blob is deleted before its row is removed, so a failed blob
  delete leaves the old attachment intact.
- A new blob is uploaded before its row is created, so a row never
  points at an object that was never stored.
- Under the all-or-nothing policy every new blob of a replacement is
  uploaded before any old blob is deleted, so a failed upload never
  leaves a restored row without its object.

Uploads made by this manager stay "pending" until the caller commits its
unit of work; after a rollback discard_pending_uploads() deletes them.

Dependencies: sqlalchemy, portfolio_backend.boundary
System role: Representative and gallery image protocols
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.aws.blob_store import BlobStore
from portfolio_backend.boundary.db.models.attachment_model import (
    ImageAttachmentModel,
    RepresentativeAttachmentModel,
)
from portfolio_backend.boundary.db.models.portfolio_model import PortfolioModel
from portfolio_backend.core.exceptions import StorageError
from portfolio_backend.models.upload import ImageUpload

logger = logging.getLogger(__name__)


class GalleryUploadPolicy(str, Enum):
    """How a gallery upload batch reacts to an individual upload failure."""

    ALL_OR_NOTHING = "all_or_nothing"
    BEST_EFFORT = "best_effort"


@dataclass
class GalleryResult:
    """
    Outcome of a gallery attach or replace.

    Attributes:
        attached_urls: URLs of the new gallery rows
        removed_urls: URLs of the gallery rows (and blobs) removed
        failed_uploads: Filenames skipped under the best-effort policy
    """

    attached_urls: list[str] = field(default_factory=list)
    removed_urls: list[str] = field(default_factory=list)
    failed_uploads: list[str] = field(default_factory=list)

    @property
    def is_partial(self) -> bool:
        return bool(self.failed_uploads)


@dataclass
class MediaChange:
    """Outcome of replace_media(): the new representative URL, if any, and the gallery result."""

    representative_url: str | None = None
    gallery: GalleryResult = field(default_factory=GalleryResult)


def _non_empty(images: Iterable[ImageUpload] | None) -> list[ImageUpload]:
    return [image for image in images or [] if not image.is_empty]


class AttachmentManager:
    """Representative and gallery image protocols for one unit of work."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        folder: str = "images",
        gallery_policy: GalleryUploadPolicy = GalleryUploadPolicy.ALL_OR_NOTHING,
    ) -> None:
        """
        Initialize attachment manager.

        Args:
            db: Async SQLAlchemy session shared with the calling service
            blob_store: Blob store for image objects
            folder: Blob store folder for all portfolio images
            gallery_policy: Reaction to a failed gallery upload
        """
        self.db = db
        self.blob_store = blob_store
        self.folder = folder
        self.gallery_policy = GalleryUploadPolicy(gallery_policy)
        self._pending_uploads: list[str] = []

    @property
    def pending_uploads(self) -> list[str]:
        return list(self._pending_uploads)

    async def attach_representative(
        self,
        portfolio: PortfolioModel,
        image: ImageUpload | None,
    ) -> RepresentativeAttachmentModel | None:
        """
        Upload an image and make it the portfolio's representative image.

        Does not flush; a new portfolio is persisted with its attachment.

        Args:
            portfolio: Portfolio without a representative image
            image: Image to upload; None or an empty file is ignored

        Returns:
            The new attachment, or None if nothing was attached

        Raises:
            StorageError: If the upload fails
        """
        url = await self._upload_optional(image)
        if url is None:
            return None

        attachment = RepresentativeAttachmentModel(url=url)
        portfolio.representative_attachment = attachment
        return attachment

    async def replace_representative(
        self,
        portfolio: PortfolioModel,
        new_image: ImageUpload | None = None,
    ) -> RepresentativeAttachmentModel | None:
        """
        Replace or clear the representative image.

        Args:
            portfolio: Persistent portfolio aggregate
            new_image: Replacement image; None clears the slot

        Returns:
            The new attachment, or None if the slot is now empty

        Raises:
            StorageError: If deleting the old blob or uploading the new one fails
        """
        await self.replace_media(portfolio, representative=new_image, swap_representative=True)
        return portfolio.representative_attachment

    async def attach_gallery(
        self,
        portfolio: PortfolioModel,
        images: Iterable[ImageUpload] | None,
    ) -> GalleryResult:
        """
        Upload images and add them to the portfolio's gallery.

        Does not flush; a new portfolio is persisted with its attachments.

        Raises:
            StorageError: If an upload fails under the all-or-nothing policy
        """
        result = GalleryResult()
        for url in await self._upload_gallery(images, result):
            self._attach_image(portfolio, url, result)
        return result

    async def replace_gallery(
        self,
        portfolio: PortfolioModel,
        new_images: Iterable[ImageUpload] | None = None,
    ) -> GalleryResult:
        """
        Replace the whole gallery.

        Args:
            portfolio: Persistent portfolio aggregate
            new_images: Replacement images; None or empty clears the gallery

        Returns:
            GalleryResult: Attached, removed and failed entries

        Raises:
            StorageError: If an old blob cannot be deleted, or an upload
                fails under the all-or-nothing policy
        """
        change = await self.replace_media(portfolio, gallery=list(new_images or []))
        return change.gallery

    async def replace_media(
        self,
        portfolio: PortfolioModel,
        *,
        representative: ImageUpload | None = None,
        swap_representative: bool = False,
        gallery: Iterable[ImageUpload] | None = None,
    ) -> MediaChange:
        """
        Replace the representative image and/or the gallery in one step.

        all_or_nothing: every new image (representative and gallery) is
        uploaded before any old blob is deleted. A failed upload deletes
        the new blobs already stored and raises with nothing old touched.
        A failed old-blob delete also discards the new blobs.

        best_effort: each slot is cleared before its new images are
        uploaded; failed gallery uploads are skipped and reported.

        Args:
            portfolio: Persistent portfolio aggregate
            representative: New representative image; None or empty clears
                the slot when swap_representative is set
            swap_representative: Replace the representative slot
            gallery: New gallery; None leaves the gallery untouched

        Returns:
            MediaChange: New representative URL and gallery outcome

        Raises:
            StorageError: If an old blob cannot be deleted, or an upload
                fails under the all-or-nothing policy
        """
        change = MediaChange()
        gallery_images = None if gallery is None else _non_empty(gallery)

        if self.gallery_policy is GalleryUploadPolicy.ALL_OR_NOTHING:
            representative_url = (
                await self._upload_optional(representative) if swap_representative else None
            )
            staged = [representative_url] if representative_url else []
            try:
                gallery_urls = await self._upload_gallery(gallery_images, change.gallery)
            except StorageError:
                await self._discard(staged)
                raise
            staged.extend(gallery_urls)

            try:
                if swap_representative:
                    await self._remove_representative(portfolio)
                if gallery_images is not None:
                    change.gallery.removed_urls = await self._remove_gallery(portfolio)
            except StorageError:
                await self._discard(staged)
                raise
        else:
            representative_url = None
            if swap_representative:
                await self._remove_representative(portfolio)
                representative_url = await self._upload_optional(representative)
            gallery_urls = []
            if gallery_images is not None:
                change.gallery.removed_urls = await self._remove_gallery(portfolio)
                gallery_urls = await self._upload_gallery(gallery_images, change.gallery)

        if representative_url is not None:
            portfolio.representative_attachment = RepresentativeAttachmentModel(url=representative_url)
            change.representative_url = representative_url
        for url in gallery_urls:
            self._attach_image(portfolio, url, change.gallery)
        await self.db.flush()

        logger.info(
            f"{__name__}:replace_media - Replaced media",
            extra={
                "portfolio_id": str(portfolio.id),
                "representative_url": change.representative_url,
                "removed": len(change.gallery.removed_urls),
                "attached": len(change.gallery.attached_urls),
                "failed": len(change.gallery.failed_uploads),
            },
        )
        return change

    async def discard_pending_uploads(self) -> list[str]:
        """
        Delete blobs uploaded since the last commit.

        Called after the enclosing unit of work rolled back. A blob that
        cannot be deleted is logged and left for the orphan sweep.

        Returns:
            list[str]: URLs that could not be deleted
        """
        urls, self._pending_uploads = self._pending_uploads, []
        return await self._delete_quietly(urls)

    def commit_pending(self) -> None:
        """Mark pending uploads as owned by committed rows."""
        self._pending_uploads.clear()

    async def _upload(self, image: ImageUpload) -> str:
        url = await self.blob_store.put(image, self.folder)
        self._pending_uploads.append(url)
        return url

    async def _upload_optional(self, image: ImageUpload | None) -> str | None:
        if image is None or image.is_empty:
            return None
        return await self._upload(image)

    async def _upload_gallery(
        self,
        images: Iterable[ImageUpload] | None,
        result: GalleryResult,
    ) -> list[str]:
        uploaded: list[str] = []
        for image in _non_empty(images):
            try:
                uploaded.append(await self._upload(image))
            except StorageError as e:
                if self.gallery_policy is GalleryUploadPolicy.ALL_OR_NOTHING:
                    await self._discard(uploaded)
                    raise
                logger.warning(
                    f"{__name__}:_upload_gallery - Skipping failed upload: {e}",
                    extra={"image_name": image.filename},
                )
                result.failed_uploads.append(image.filename)
        return uploaded

    async def _remove_representative(self, portfolio: PortfolioModel) -> None:
        current = portfolio.representative_attachment
        if current is None:
            return
        await self.blob_store.delete(current.url)
        # delete-orphan removes the row at flush
        portfolio.representative_attachment = None
        await self.db.flush()
        logger.info(
            f"{__name__}:_remove_representative - Removed representative image",
            extra={"portfolio_id": str(portfolio.id), "url": current.url},
        )

    async def _remove_gallery(self, portfolio: PortfolioModel) -> list[str]:
        removed: list[str] = []
        # Remove each row as soon as its blob is gone
        while portfolio.image_attachments:
            attachment = portfolio.image_attachments[0]
            await self.blob_store.delete(attachment.url)
            portfolio.image_attachments.remove(attachment)
            removed.append(attachment.url)
        await self.db.flush()
        return removed

    def _attach_image(self, portfolio: PortfolioModel, url: str, result: GalleryResult) -> None:
        portfolio.image_attachments.append(ImageAttachmentModel(url=url))
        result.attached_urls.append(url)

    async def _discard(self, urls: list[str]) -> None:
        for url in urls:
            if url in self._pending_uploads:
                self._pending_uploads.remove(url)
        await self._delete_quietly(urls)

    async def _delete_quietly(self, urls: list[str]) -> list[str]:
        failed: list[str] = []
        for url in urls:
            try:
                await self.blob_store.delete(url)
            except StorageError as e:
                logger.warning(
                    f"{__name__}:_delete_quietly - Orphaned blob left for sweep: {e}",
                    extra={"url": url},
                )
                failed.append(url)
        return failed
