"""Service orchestrators."""

from .attachment_manager import (
    AttachmentManager,
    GalleryResult,
    GalleryUploadPolicy,
    MediaChange,
)
from .blob_sweeper import OrphanedBlobSweeper, SweepReport
from .portfolio_service import PortfolioService
from .skill_reconciler import SkillReconciler
from .view_guard import DailyViewGuard, ViewCountGuard

__all__ = [
    "AttachmentManager",
    "DailyViewGuard",
    "GalleryResult",
    "GalleryUploadPolicy",
    "MediaChange",
    "OrphanedBlobSweeper",
    "PortfolioService",
    "SkillReconciler",
    "SweepReport",
    "ViewCountGuard",
]
