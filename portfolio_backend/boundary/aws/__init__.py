"""
AWS boundary modules.

Exports: BlobStore, BlobObject, S3BlobStore
"""

from .blob_store import BlobObject, BlobStore
from .s3_client import S3BlobStore

__all__ = ["BlobObject", "BlobStore", "S3BlobStore"]
