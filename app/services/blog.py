"""
Blog collection service.

All operations work on the ``blogs`` array of the stored document. Reads
are fail-open: if the store cannot be read they behave as if there were no
blogs. Writes hold the store lock across load, mutate and save, and let
store failures surface to the caller.
"""

from app.clients.protocols import DocumentStoreProtocol
from app.configs.settings import RECENT_BLOGS_LIMIT
from app.errors.blog import BlogNotFoundError, RequiredFieldError
from app.errors.store import DocumentStoreError
from app.monitoring import get_logger
from app.schemas.blog import BlogSummary, ImageUpload, StoredImage
from app.schemas.document import BlogPost, Document
from app.services.media import MediaService
from app.utils.helpers import slugify, utc_now

logger = get_logger(__name__)


class BlogService:
    """Service for listing, reading, creating and deleting blogs."""

    def __init__(self, store: DocumentStoreProtocol, media: MediaService) -> None:
        self.store = store
        self.media = media

    async def _read(self) -> Document:
        try:
            return await self.store.load()
        except DocumentStoreError:
            logger.exception(f"Reading from the {self.store.name} store failed, serving no blogs")
            return Document()

    async def list_summaries(self) -> list[BlogSummary]:
        """All blogs in stored order, without content."""
        document = await self._read()
        return [BlogSummary.from_post(blog) for blog in document.blogs]

    async def list_recent(self, limit: int = RECENT_BLOGS_LIMIT) -> list[BlogSummary]:
        """The ``limit`` newest blogs by creation time."""
        document = await self._read()
        newest = sorted(document.blogs, key=lambda blog: blog.created_at, reverse=True)
        return [BlogSummary.from_post(blog) for blog in newest[:limit]]

    async def get(self, blog_id: int) -> BlogPost:
        """
        Fetch one blog.

        Raises:
            BlogNotFoundError: If no blog has this id.
        """
        document = await self._read()
        if blog := document.find_blog(blog_id):
            return blog
        raise BlogNotFoundError(blog_id)

    @staticmethod
    def _require_fields(
        title: str | None,
        content: str | None,
        author: str | None,
    ) -> tuple[str, str, str]:
        fields = {
            "title": (title or "").strip(),
            "content": (content or "").strip(),
            "author": (author or "").strip(),
        }
        if missing := [name for name, value in fields.items() if not value]:
            raise RequiredFieldError(missing)
        return fields["title"], fields["content"], fields["author"]

    async def create(
        self,
        title: str | None,
        content: str | None,
        author: str | None,
        image: ImageUpload | None = None,
    ) -> BlogPost:
        """
        Create a blog, uploading its image first when one is given.

        Raises:
            RequiredFieldError: If title, content or author is blank.
            UploadError: If the image is rejected or cannot be stored.
            DocumentStoreError: If the document cannot be read or written.
                A freshly uploaded image is removed again in that case.
        """
        title, content, author = self._require_fields(title, content, author)

        stored: StoredImage | None = None
        if image is not None:
            stored = await self.media.upload_image(image)

        try:
            async with self.store.lock:
                document = await self.store.load()
                now = utc_now()
                blog = BlogPost(
                    id=document.next_blog_id(),
                    title=title,
                    slug=slugify(title),
                    content=content,
                    author=author,
                    created_at=now,
                    updated_at=now,
                    image_url=stored.url if stored else None,
                    image_public_id=stored.public_id if stored else None,
                )
                document.blogs.append(blog)
                await self.store.save(document)
        except DocumentStoreError:
            if stored is not None:
                await self.media.discard_image(stored.public_id)
            raise

        logger.info(f"Created blog {blog.id} ({blog.slug})")
        return blog

    async def delete(self, blog_id: int) -> BlogPost:
        """
        Delete a blog, then its image.

        The image is removed only after the document save succeeded, and a
        failure to remove it does not undo the deletion.

        Raises:
            BlogNotFoundError: If no blog has this id.
            DocumentStoreError: If the document cannot be read or written.
        """
        async with self.store.lock:
            document = await self.store.load()
            blog = document.find_blog(blog_id)
            if blog is None:
                raise BlogNotFoundError(blog_id)
            document.blogs = [entry for entry in document.blogs if entry.id != blog_id]
            await self.store.save(document)

        logger.info(f"Deleted blog {blog_id}")

        if blog.image_public_id:
            await self.media.discard_image(blog.image_public_id)
        return blog
