"""
Test suite for AttachmentManager.

Tests representative and gallery protocols against the in-memory
database and blob store, including failure ordering and cleanup of
uploads after a rollback.

System role: Verification of blob/relational lockstep for images
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.application.services.attachment_manager import (
    AttachmentManager,
    GalleryUploadPolicy,
)
from portfolio_backend.boundary.db.CRUD.portfolio_crud import portfolio_crud
from portfolio_backend.boundary.db.models import PortfolioModel
from portfolio_backend.core.exceptions import StorageError
from portfolio_backend.models.upload import ImageUpload


@pytest.fixture
def manager(test_async_db: AsyncSession, blob_store) -> AttachmentManager:
    """Provide manager with the default all-or-nothing policy."""
    return AttachmentManager(test_async_db, blob_store)


@pytest.fixture
def best_effort_manager(test_async_db: AsyncSession, blob_store) -> AttachmentManager:
    """Provide manager with the best-effort gallery policy."""
    return AttachmentManager(
        test_async_db, blob_store, gallery_policy=GalleryUploadPolicy.BEST_EFFORT
    )


@pytest.fixture
async def portfolio(
    test_async_db: AsyncSession, owner, manager: AttachmentManager, image_factory
) -> PortfolioModel:
    """Persisted portfolio with a representative image and two gallery images."""
    entity = PortfolioModel(
        user_id=owner.id,
        title="Media",
        representative_attachment=None,
        image_attachments=[],
        skills=[],
    )
    await manager.attach_representative(entity, image_factory("cover.png"))
    await manager.attach_gallery(entity, [image_factory("g1.png"), image_factory("g2.png")])
    test_async_db.add(entity)
    await test_async_db.commit()
    manager.commit_pending()
    return await portfolio_crud.get_aggregate(test_async_db, entity.id)


class TestAttach:
    """Test suite for attach_representative() and attach_gallery()."""

    @pytest.mark.asyncio
    async def test_attach_uploads_before_linking_rows(
        self, portfolio: PortfolioModel, blob_store
    ) -> None:
        # Assert
        urls = {a.url for a in portfolio.image_attachments}
        urls.add(portfolio.representative_attachment.url)
        assert urls == set(blob_store.objects)
        assert all(a.portfolio_id == portfolio.id for a in portfolio.image_attachments)

    @pytest.mark.asyncio
    async def test_empty_images_are_ignored(
        self, manager: AttachmentManager, blob_store, owner
    ) -> None:
        # Arrange
        entity = PortfolioModel(
            user_id=owner.id, title="x", representative_attachment=None, image_attachments=[]
        )
        empty = ImageUpload(filename="empty.png", data=b"")

        # Act
        representative = await manager.attach_representative(entity, empty)
        result = await manager.attach_gallery(entity, [empty])

        # Assert
        assert representative is None
        assert result.attached_urls == []
        assert blob_store.objects == {}

    @pytest.mark.asyncio
    async def test_discard_pending_uploads_deletes_uncommitted_blobs(
        self, manager: AttachmentManager, blob_store, owner, image_factory
    ) -> None:
        # Arrange
        entity = PortfolioModel(
            user_id=owner.id, title="x", representative_attachment=None, image_attachments=[]
        )
        await manager.attach_gallery(entity, [image_factory("a.png"), image_factory("b.png")])

        # Act
        leftover = await manager.discard_pending_uploads()

        # Assert
        assert leftover == []
        assert blob_store.objects == {}
        assert manager.pending_uploads == []

    @pytest.mark.asyncio
    async def test_discard_reports_blobs_it_could_not_delete(
        self, manager: AttachmentManager, blob_store, owner, image_factory
    ) -> None:
        # Arrange
        entity = PortfolioModel(
            user_id=owner.id, title="x", representative_attachment=None, image_attachments=[]
        )
        attachment = await manager.attach_representative(entity, image_factory())
        blob_store.fail_all_deletes = True

        # Act
        leftover = await manager.discard_pending_uploads()

        # Assert
        assert leftover == [attachment.url]


class TestReplaceRepresentative:
    """Test suite for replace_representative()."""

    @pytest.mark.asyncio
    async def test_replace_deletes_old_blob_and_links_new_one(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        old_url = portfolio.representative_attachment.url

        # Act
        new = await manager.replace_representative(portfolio, image_factory("new.png"))
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert reloaded.representative_attachment.url == new.url
        assert old_url in blob_store.deleted
        assert new.url in blob_store.objects

    @pytest.mark.asyncio
    async def test_replace_with_none_clears_the_slot(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        test_async_db: AsyncSession,
    ) -> None:
        # Act
        result = await manager.replace_representative(portfolio, None)
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert result is None
        assert reloaded.representative_attachment is None

    @pytest.mark.asyncio
    async def test_failed_blob_delete_keeps_old_attachment(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        portfolio_id = portfolio.id
        old_url = portfolio.representative_attachment.url
        blob_store.fail_delete_urls.add(old_url)

        # Act & Assert
        with pytest.raises(StorageError):
            await manager.replace_representative(portfolio, image_factory("new.png"))

        await test_async_db.rollback()
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio_id)
        assert reloaded.representative_attachment.url == old_url
        assert manager.pending_uploads == []


class TestReplaceGallery:
    """Test suite for replace_gallery()."""

    @pytest.mark.asyncio
    async def test_replace_swaps_the_whole_set(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        old_urls = {a.url for a in portfolio.image_attachments}

        # Act
        result = await manager.replace_gallery(portfolio, [image_factory("n1.png")])
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert [a.url for a in reloaded.image_attachments] == result.attached_urls
        assert set(result.removed_urls) == old_urls
        assert old_urls.isdisjoint(blob_store.objects)

    @pytest.mark.asyncio
    async def test_all_or_nothing_failure_keeps_old_gallery(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        portfolio_id = portfolio.id
        old_urls = {a.url for a in portfolio.image_attachments}
        blob_store.fail_put_filenames.add("bad.png")

        # Act & Assert
        with pytest.raises(StorageError):
            await manager.replace_gallery(
                portfolio, [image_factory("ok.png"), image_factory("bad.png")]
            )

        await test_async_db.rollback()
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio_id)
        assert {a.url for a in reloaded.image_attachments} == old_urls
        # Only the committed representative and gallery blobs remain
        assert len(blob_store.objects) == 3
        assert manager.pending_uploads == []

    @pytest.mark.asyncio
    async def test_all_or_nothing_failed_old_delete_discards_new_uploads(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        blob_store.fail_delete_urls.update(a.url for a in portfolio.image_attachments)

        # Act & Assert
        with pytest.raises(StorageError):
            await manager.replace_gallery(portfolio, [image_factory("n1.png")])

        assert len(blob_store.objects) == 3
        assert manager.pending_uploads == []

    @pytest.mark.asyncio
    async def test_best_effort_skips_failed_uploads(
        self,
        best_effort_manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        blob_store.fail_put_filenames.add("bad.png")

        # Act
        result = await best_effort_manager.replace_gallery(
            portfolio, [image_factory("ok.png"), image_factory("bad.png")]
        )
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert result.is_partial is True
        assert result.failed_uploads == ["bad.png"]
        assert [a.url for a in reloaded.image_attachments] == result.attached_urls
        assert len(result.attached_urls) == 1


class TestReplaceMedia:
    """Test suite for replace_media()."""

    @pytest.mark.asyncio
    async def test_all_or_nothing_uploads_everything_before_deleting(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        portfolio_id = portfolio.id
        old_cover = portfolio.representative_attachment.url
        blob_store.fail_put_filenames.add("n2.png")

        # Act & Assert
        with pytest.raises(StorageError):
            await manager.replace_media(
                portfolio,
                representative=image_factory("new-cover.png"),
                swap_representative=True,
                gallery=[image_factory("n1.png"), image_factory("n2.png")],
            )

        await test_async_db.rollback()
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio_id)
        assert reloaded.representative_attachment.url == old_cover
        assert old_cover not in blob_store.deleted
        assert len(blob_store.objects) == 3
        assert manager.pending_uploads == []

    @pytest.mark.asyncio
    async def test_replaces_both_slots(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        blob_store,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        old_urls = {a.url for a in portfolio.image_attachments}
        old_urls.add(portfolio.representative_attachment.url)

        # Act
        change = await manager.replace_media(
            portfolio,
            representative=image_factory("new-cover.png"),
            swap_representative=True,
            gallery=[image_factory("n1.png")],
        )
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert reloaded.representative_attachment.url == change.representative_url
        assert [a.url for a in reloaded.image_attachments] == change.gallery.attached_urls
        assert set(blob_store.deleted) == old_urls
        assert set(blob_store.objects) == {change.representative_url, *change.gallery.attached_urls}

    @pytest.mark.asyncio
    async def test_gallery_none_leaves_gallery_untouched(
        self,
        manager: AttachmentManager,
        portfolio: PortfolioModel,
        test_async_db: AsyncSession,
        image_factory,
    ) -> None:
        # Arrange
        gallery = {a.url for a in portfolio.image_attachments}

        # Act
        change = await manager.replace_media(
            portfolio, representative=image_factory("new-cover.png"), swap_representative=True
        )
        await test_async_db.commit()

        # Assert
        reloaded = await portfolio_crud.get_aggregate(test_async_db, portfolio.id)
        assert {a.url for a in reloaded.image_attachments} == gallery
        assert change.gallery.removed_urls == []
