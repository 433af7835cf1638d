"""
Orphaned blob sweep.

Usage:
    python -m portfolio_backend.scripts.sweep_orphaned_blobs
    python -m portfolio_backend.scripts.sweep_orphaned_blobs --folder images --delete
    python -m portfolio_backend.scripts.sweep_orphaned_blobs --grace-minutes 120

Purpose:
- List image objects in the media bucket
- Report objects no attachment row references
- Delete them with --delete (dry run otherwise)

Dependencies: boto3, sqlalchemy
System role: Batch reconciliation between the blob store and the database
"""

import argparse
import asyncio
import logging
import sys
from datetime import timedelta

from portfolio_backend.application.services.blob_sweeper import OrphanedBlobSweeper, SweepReport
from portfolio_backend.boundary.aws.s3_client import S3BlobStore
from portfolio_backend.boundary.db.connection import get_async_engine, get_async_session_factory
from portfolio_backend.configs import get_settings
from portfolio_backend.core.exceptions import StorageError
from portfolio_backend.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        description="Find (and optionally delete) blobs no portfolio references."
    )
    parser.add_argument(
        "--folder",
        default=settings.portfolio.image_folder,
        help="Blob store folder to scan (default: %(default)s)",
    )
    parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete orphaned objects instead of only reporting them",
    )
    parser.add_argument(
        "--grace-minutes",
        type=int,
        default=settings.portfolio.sweep_grace_minutes,
        help="Ignore objects younger than this (default: %(default)s)",
    )
    return parser.parse_args(argv)


async def run(folder: str, delete: bool, grace_minutes: int) -> SweepReport:
    """
    Run one sweep against the configured bucket and database.

    Args:
        folder: Blob store folder to scan
        delete: Delete orphans instead of reporting them
        grace_minutes: Minimum object age in minutes

    Returns:
        SweepReport: Sweep outcome
    """
    settings = get_settings()
    blob_store = S3BlobStore.from_settings(settings.s3_storage)
    engine = get_async_engine()
    SessionFactory = get_async_session_factory(engine)

    try:
        async with SessionFactory() as session:
            sweeper = OrphanedBlobSweeper(session, blob_store)
            return await sweeper.sweep(
                folder,
                delete=delete,
                grace_period=timedelta(minutes=grace_minutes),
            )
    finally:
        await engine.dispose()


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    configure_logging()
    args = parse_args(argv)

    try:
        report = asyncio.run(run(args.folder, args.delete, args.grace_minutes))
    except StorageError as e:
        logger.error(f"Sweep failed: {e}")
        return 1

    logger.info(
        f"Scanned {report.scanned} objects in '{report.folder}': "
        f"{report.referenced} referenced, {report.too_recent} too recent, "
        f"{len(report.orphaned)} orphaned"
    )
    for url in report.orphaned:
        status = "deleted" if url in report.deleted else "failed" if url in report.failed else "orphan"
        logger.info(f"  [{status}] {url}")

    return 1 if report.failed else 0


if __name__ == "__main__":
    sys.exit(main())
