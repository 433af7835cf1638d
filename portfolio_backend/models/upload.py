"""
Uploaded image payload.

Dependencies: None
System role: File handed to the blob store for representative and gallery images
"""

from dataclasses import dataclass
from pathlib import PurePosixPath


@dataclass(frozen=True)
class ImageUpload:
    """
    An image file received from the caller.

    Attributes:
        filename: Original client filename
        data: Raw file bytes
        content_type: MIME type reported by the client
    """

    filename: str
    data: bytes
    content_type: str = "application/octet-stream"

    @property
    def is_empty(self) -> bool:
        return not self.data

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        """Lower-cased file suffix including the dot, or "" if none."""
        return PurePosixPath(self.filename).suffix.lower()
