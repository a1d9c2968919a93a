"""
Local filesystem storage implementation.

Files are stored under the configured uploads directory and served by the
app's static mount, so the public URL is a path such as
``/uploads/1718000000000-3f2a9c1d-cover.jpg``.
"""

from pathlib import Path

import aiofiles
import aiofiles.os

from app.errors.upload import StorageError
from app.schemas.blog import StoredImage
from app.services.storage.base import build_image_name, extension_for


class LocalStorage:
    """
    Local filesystem storage implementation.

    The public id is the stored file name, relative to the uploads directory.
    """

    name = "local"

    def __init__(self, uploads_dir: Path | str, url_prefix: str = "/uploads") -> None:
        self.uploads_dir = Path(uploads_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def _get_file_path(self, public_id: str) -> Path:
        path = (self.uploads_dir / public_id).resolve()
        if self.uploads_dir.resolve() not in path.parents:
            mssg = "Refusing to touch a file outside the uploads directory"
            raise StorageError(mssg)
        return path

    async def upload_image(
        self,
        file_data: bytes,
        content_type: str,
        filename: str | None = None,
    ) -> StoredImage:
        public_id = f"{build_image_name(filename)}.{extension_for(content_type)}"
        file_path = self._get_file_path(public_id)

        try:
            await aiofiles.os.makedirs(self.uploads_dir, exist_ok=True)
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(file_data)
        except OSError as e:
            raise StorageError from e

        return StoredImage(url=f"{self.url_prefix}/{public_id}", public_id=public_id)

    async def delete_image(self, public_id: str) -> bool:
        file_path = self._get_file_path(public_id)
        try:
            await aiofiles.os.remove(file_path)
        except FileNotFoundError:
            return False
        except OSError as e:
            mssg = f"Could not delete image {public_id}"
            raise StorageError(mssg) from e
        return True
