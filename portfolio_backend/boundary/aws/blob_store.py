"""
Blob store interface.

The contract the attachment protocols and the orphan sweep rely on.
Implementations must raise StorageError for any storage failure.

Dependencies: portfolio_backend.models
System role: Port for external object storage
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol, runtime_checkable

from portfolio_backend.models.upload import ImageUpload


@dataclass(frozen=True)
class BlobObject:
    """
    A stored object as reported by a listing.

    Attributes:
        url: Public URL, same form put() returns
        last_modified: Last write time (UTC)
        size: Object size in bytes
    """

    url: str
    last_modified: datetime
    size: int = 0


@runtime_checkable
class BlobStore(Protocol):
    """Path-addressable object storage addressed by URL."""

    async def put(self, upload: ImageUpload, folder: str) -> str:
        """Store the upload under folder and return its URL."""
        ...

    async def delete(self, url: str) -> None:
        """Delete the object behind url."""
        ...

    async def list_objects(self, folder: str) -> list[BlobObject]:
        """List every object stored under folder."""
        ...
