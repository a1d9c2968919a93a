"""
Media upload service.

Validates blog images and hands them to the configured storage backend.
"""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

from app.configs.settings import ALLOWED_IMAGE_TYPES, Settings
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    StorageError,
    UnsupportedImageTypeError,
)
from app.monitoring import get_logger
from app.schemas.blog import ImageUpload, StoredImage
from app.services.storage import StorageService

logger = get_logger(__name__)


class MediaService:
    """
    Service for managing blog image uploads.

    Handles image validation and storage operations.
    """

    def __init__(self, storage: StorageService, settings: Settings) -> None:
        self.storage = storage
        self.image_max_size_mb = settings.MAX_IMAGE_SIZE_MB
        self.image_max_size_bytes = settings.max_image_size_bytes
        self.image_allowed_types = ALLOWED_IMAGE_TYPES

    def _validate_image_type(self, content_type: str | None) -> None:
        if not content_type or content_type not in self.image_allowed_types:
            raise UnsupportedImageTypeError(
                content_type=content_type or "unknown",
                allowed_types=self.image_allowed_types,
            )

    def _validate_image_size(self, file_data: bytes) -> None:
        actual_size = len(file_data)
        if actual_size > self.image_max_size_bytes:
            raise ImageTooLargeError(
                max_size_mb=self.image_max_size_mb,
                actual_size_mb=actual_size / (1024 * 1024),
            )

    def _validate_image_content(self, file_data: bytes) -> None:
        """Validate that the bytes decode as an image."""
        try:
            with Image.open(BytesIO(file_data)) as img:
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise InvalidImageError from e

    def validate_image(self, image: ImageUpload) -> None:
        """
        Run all checks on an uploaded image.

        Raises:
            UnsupportedImageTypeError: Content type not allowed (415)
            ImageTooLargeError: Over the size limit (413)
            InvalidImageError: Bytes are not a decodable image (400)
        """
        self._validate_image_type(image.content_type)
        self._validate_image_size(image.file_data)
        self._validate_image_content(image.file_data)

    async def upload_image(self, image: ImageUpload) -> StoredImage:
        """Validate and store an image."""
        self.validate_image(image)
        stored = await self.storage.upload_image(
            image.file_data,
            image.content_type or "application/octet-stream",
            image.filename,
        )
        logger.info(f"Stored image {stored.public_id} ({image.size} bytes)")
        return stored

    async def discard_image(self, public_id: str) -> None:
        """
        Delete an image, best-effort.

        Failures are logged and swallowed; the caller's own work has already
        been committed.
        """
        try:
            deleted = await self.storage.delete_image(public_id)
        except StorageError:
            logger.exception(f"Failed to delete image {public_id}")
            return

        if not deleted:
            logger.warning(f"Image {public_id} was already gone from storage")
