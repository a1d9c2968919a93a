# tests/services/test_media.py
"""Tests for the media upload service."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.configs import Settings
from app.errors import (
    ImageTooLargeError,
    InvalidImageError,
    StorageError,
    UnsupportedImageTypeError,
)
from app.schemas import ImageUpload, StoredImage
from app.services import MediaService


@pytest.fixture
def mock_storage() -> MagicMock:
    storage = MagicMock()
    storage.name = "mock"
    storage.upload_image = AsyncMock(
        return_value=StoredImage(url="/uploads/x.jpg", public_id="x.jpg"),
    )
    storage.delete_image = AsyncMock(return_value=True)
    return storage


@pytest.fixture
def media(mock_storage: MagicMock, settings: Settings) -> MediaService:
    return MediaService(mock_storage, settings)


class TestValidateImage:
    """Tests for image validation."""

    def test_accepts_jpeg(self, media: MediaService, valid_jpeg_bytes: bytes) -> None:
        media.validate_image(ImageUpload(valid_jpeg_bytes, "image/jpeg", "a.jpg"))

    def test_accepts_png(self, media: MediaService, valid_png_bytes: bytes) -> None:
        media.validate_image(ImageUpload(valid_png_bytes, "image/png", "a.png"))

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/svg+xml", None])
    def test_rejects_unsupported_type(
        self,
        media: MediaService,
        valid_jpeg_bytes: bytes,
        content_type: str | None,
    ) -> None:
        with pytest.raises(UnsupportedImageTypeError) as exc_info:
            media.validate_image(ImageUpload(valid_jpeg_bytes, content_type))
        assert exc_info.value.status_code == 415

    def test_rejects_oversized_image(self, settings: Settings, mock_storage: MagicMock) -> None:
        small_limit = settings.model_copy(update={"MAX_IMAGE_SIZE_MB": 1})
        media = MediaService(mock_storage, small_limit)
        too_big = b"\xff" * (1024 * 1024 + 1)

        with pytest.raises(ImageTooLargeError) as exc_info:
            media.validate_image(ImageUpload(too_big, "image/jpeg"))
        assert exc_info.value.status_code == 413

    def test_rejects_bytes_that_are_not_an_image(self, media: MediaService) -> None:
        with pytest.raises(InvalidImageError) as exc_info:
            media.validate_image(ImageUpload(b"definitely not a jpeg", "image/jpeg"))
        assert exc_info.value.status_code == 400


class TestUploadImage:
    @pytest.mark.asyncio
    async def test_valid_image_is_stored(
        self,
        media: MediaService,
        mock_storage: MagicMock,
        valid_jpeg_bytes: bytes,
    ) -> None:
        stored = await media.upload_image(ImageUpload(valid_jpeg_bytes, "image/jpeg", "c.jpg"))

        assert stored.public_id == "x.jpg"
        mock_storage.upload_image.assert_awaited_once_with(
            valid_jpeg_bytes,
            "image/jpeg",
            "c.jpg",
        )

    @pytest.mark.asyncio
    async def test_invalid_image_never_reaches_storage(
        self,
        media: MediaService,
        mock_storage: MagicMock,
    ) -> None:
        with pytest.raises(InvalidImageError):
            await media.upload_image(ImageUpload(b"garbage", "image/png"))
        mock_storage.upload_image.assert_not_awaited()


class TestDiscardImage:
    @pytest.mark.asyncio
    async def test_deletes_through_storage(
        self,
        media: MediaService,
        mock_storage: MagicMock,
    ) -> None:
        await media.discard_image("x.jpg")
        mock_storage.delete_image.assert_awaited_once_with("x.jpg")

    @pytest.mark.asyncio
    async def test_storage_failure_is_swallowed(
        self,
        media: MediaService,
        mock_storage: MagicMock,
    ) -> None:
        mock_storage.delete_image.side_effect = StorageError("cdn down")

        await media.discard_image("x.jpg")

        mock_storage.delete_image.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_already_deleted_image_is_fine(
        self,
        media: MediaService,
        mock_storage: MagicMock,
    ) -> None:
        mock_storage.delete_image.return_value = False
        await media.discard_image("gone.jpg")
