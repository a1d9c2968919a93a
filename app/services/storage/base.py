"""
Base storage protocol for blog image storage.

This module defines the interface for storage backends, so the blog
service stays storage-agnostic (local filesystem, Cloudinary, ...).
"""

from abc import abstractmethod
from time import time
from typing import Protocol
from uuid import uuid4

from app.schemas.blog import StoredImage
from app.utils.helpers import sanitize_filename

EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def build_image_name(filename: str | None = None) -> str:
    """
    Build a collision-resistant image name.

    Millisecond timestamp, a short random suffix and, when available,
    the sanitised stem of the uploaded filename.

    Examples
    --------
    >>> build_image_name("Cover Photo.png")  # doctest: +SKIP
    '1718000000000-3f2a9c1d-cover-photo'
    """
    name = f"{int(time() * 1000)}-{uuid4().hex[:8]}"
    if stem := sanitize_filename(filename):
        name = f"{name}-{stem}"
    return name


def extension_for(content_type: str | None) -> str:
    return EXTENSIONS.get(content_type or "", "bin")


class StorageService(Protocol):
    """
    Protocol defining the interface for storage services.

    All storage implementations must implement these methods
    to ensure consistent behavior across different backends.
    """

    name: str

    @abstractmethod
    async def upload_image(
        self,
        file_data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> StoredImage:
        """
        Upload a blog image.

        Args:
            file_data: Raw image bytes
            content_type: MIME type of the image
            filename: Original filename, used only to make the name readable

        Returns:
            StoredImage: Public URL plus the handle needed to delete it

        Raises:
            StorageError: If the backend rejects the upload
        """
        ...

    @abstractmethod
    async def delete_image(self, public_id: str) -> bool:
        """
        Delete a blog image by its handle.

        Returns:
            bool: True if something was deleted, False if it did not exist

        Raises:
            StorageError: If the backend call fails
        """
        ...
