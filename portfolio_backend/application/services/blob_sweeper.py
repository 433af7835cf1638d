"""
Orphaned blob sweeper.

Batch reconciliation between the blob store and the attachment tables.
Reclaims objects no row references: blobs of deleted portfolios and
blobs left behind by failed units of work. Not part of any request path.

Dependencies: sqlalchemy, portfolio_backend.boundary
System role: Operational safety net for blob/relational drift
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.aws.blob_store import BlobStore
from portfolio_backend.boundary.db.CRUD.attachment_crud import (
    image_attachment_crud,
    representative_attachment_crud,
)
from portfolio_backend.core.exceptions import StorageError

logger = logging.getLogger(__name__)


@dataclass
class SweepReport:
    """
    Result of one sweep.

    Attributes:
        folder: Blob store folder that was scanned
        scanned: Objects listed in the folder
        referenced: Objects still referenced by an attachment row
        too_recent: Unreferenced objects inside the grace period
        orphaned: Unreferenced objects older than the grace period
        deleted: Orphans deleted (only when deleting)
        failed: Orphans whose delete failed
    """

    folder: str
    scanned: int = 0
    referenced: int = 0
    too_recent: int = 0
    orphaned: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class OrphanedBlobSweeper:
    """Find and optionally delete blobs no attachment row references."""

    def __init__(
        self,
        db: AsyncSession,
        blob_store: BlobStore,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        """
        Initialize sweeper.

        Args:
            db: Async SQLAlchemy session (read only)
            blob_store: Blob store to scan
            clock: Current UTC time source
        """
        self.db = db
        self.blob_store = blob_store
        self._clock = clock

    async def sweep(
        self,
        folder: str,
        *,
        delete: bool = False,
        grace_period: timedelta = timedelta(hours=1),
    ) -> SweepReport:
        """
        Compare stored objects against referenced URLs.

        Objects younger than grace_period are never reported, since they
        may belong to a unit of work that has not committed yet.

        Args:
            folder: Blob store folder to scan
            delete: Delete orphans instead of only reporting them
            grace_period: Minimum object age before it counts as orphaned

        Returns:
            SweepReport: Counts and URLs

        Raises:
            StorageError: If the folder cannot be listed
        """
        referenced_urls = await representative_attachment_crud.get_all_urls(self.db)
        referenced_urls |= await image_attachment_crud.get_all_urls(self.db)

        objects = await self.blob_store.list_objects(folder)
        cutoff = self._clock() - grace_period
        report = SweepReport(folder=folder, scanned=len(objects))

        for obj in objects:
            if obj.url in referenced_urls:
                report.referenced += 1
            elif obj.last_modified > cutoff:
                report.too_recent += 1
            else:
                report.orphaned.append(obj.url)

        if delete:
            for url in report.orphaned:
                try:
                    await self.blob_store.delete(url)
                    report.deleted.append(url)
                except StorageError as e:
                    logger.error(f"{__name__}:sweep - {e}", extra={"url": url})
                    report.failed.append(url)

        logger.info(
            f"{__name__}:sweep - Sweep finished",
            extra={
                "folder": folder,
                "scanned": report.scanned,
                "orphaned": len(report.orphaned),
                "deleted": len(report.deleted),
                "failed": len(report.failed),
            },
        )
        return report
