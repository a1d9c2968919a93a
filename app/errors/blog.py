"""Blog collection errors."""

from starlette.status import HTTP_400_BAD_REQUEST, HTTP_404_NOT_FOUND

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class BlogError(BaseAppError):
    """Base class for blog errors."""


class RequiredFieldError(BlogError):
    """Raised when title, content or author is missing or blank."""

    def __init__(self, fields: list[str] | None = None) -> None:
        detail = "title, content and author are required"
        if fields:
            detail += f" (missing: {', '.join(fields)})"
        super().__init__(detail, HTTP_400_BAD_REQUEST)
        self.fields = fields or []


class BlogNotFoundError(BlogError):
    """Raised when no blog carries the requested id."""

    def __init__(self, blog_id: int | str) -> None:
        super().__init__(f"blog {blog_id} not found", HTTP_404_NOT_FOUND)
        self.blog_id = blog_id


blog_exception_handler = create_exception_handler(logger)
