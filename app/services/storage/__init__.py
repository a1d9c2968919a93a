"""
Storage services package.

This package provides storage backends for blog images,
with support for local filesystem and Cloudinary.
"""

from app.configs.settings import Settings
from app.services.storage.base import StorageService, build_image_name
from app.services.storage.cloudinary_storage import CloudinaryStorage
from app.services.storage.local import LocalStorage


def get_storage_service(settings: Settings) -> StorageService:
    """
    Get the configured storage service.

    Returns the appropriate storage implementation based on
    the STORAGE_PROVIDER setting.
    """
    if settings.STORAGE_PROVIDER == "cloudinary":
        return CloudinaryStorage(settings)
    return LocalStorage(settings.UPLOADS_DIR, settings.UPLOADS_URL_PREFIX)


__all__ = [
    "CloudinaryStorage",
    "LocalStorage",
    "StorageService",
    "build_image_name",
    "get_storage_service",
]
