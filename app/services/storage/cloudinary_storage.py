"""
Cloudinary storage implementation.

This module provides a Cloudinary-based storage backend for production
use. Offers automatic image optimization and CDN delivery.
"""

from asyncio import get_event_loop
from functools import partial

from cloudinary import config
from cloudinary.exceptions import Error as CloudinaryError
from cloudinary.uploader import destroy, upload

from app.configs.settings import Settings
from app.errors.upload import StorageError
from app.schemas.blog import StoredImage
from app.services.storage.base import build_image_name


class CloudinaryStorage:
    """
    Cloudinary storage implementation.

    Images go to the configured folder; the Cloudinary ``public_id`` is the
    deletion handle stored on the blog.
    """

    name = "cloudinary"

    def __init__(self, settings: Settings) -> None:
        """Initialize Cloudinary with configured credentials."""
        config(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET.get_secret_value(),
            secure=True,
        )
        self.folder = settings.CLOUDINARY_FOLDER

    async def upload_image(
        self,
        file_data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> StoredImage:
        public_id = f"{self.folder}/{build_image_name(filename)}"

        # Run blocking Cloudinary upload in thread pool
        loop = get_event_loop()
        try:
            result = await loop.run_in_executor(
                None,
                partial(
                    upload,
                    file_data,
                    public_id=public_id,
                    overwrite=False,
                    resource_type="image",
                    transformation=[
                        {"quality": "auto:good"},
                        {"fetch_format": "auto"},
                    ],
                ),
            )
        except (CloudinaryError, OSError) as e:
            raise StorageError from e

        return StoredImage(url=result["secure_url"], public_id=result["public_id"])

    async def delete_image(self, public_id: str) -> bool:
        loop = get_event_loop()
        try:
            result = await loop.run_in_executor(
                None,
                partial(destroy, public_id, resource_type="image", invalidate=True),
            )
        except (CloudinaryError, OSError) as e:
            mssg = f"Could not delete image {public_id}"
            raise StorageError(mssg) from e

        return result.get("result") == "ok"
