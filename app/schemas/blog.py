"""Blog request and response schemas."""

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.document import BlogPost


class BlogSummary(BaseModel):
    """
    Listing projection of a blog post.

    Content, ``updated_at`` and the storage handle are deliberately absent.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    slug: str | None = None
    title: str
    author: str
    created_at: datetime
    image_url: str | None = None

    @classmethod
    def from_post(cls, post: BlogPost) -> "BlogSummary":
        return cls.model_validate(post)


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str = Field(..., examples=["Blog deleted successfully"])


@dataclass(frozen=True)
class ImageUpload:
    """Raw image received with a create request."""

    file_data: bytes
    content_type: str | None
    filename: str | None = None

    @property
    def size(self) -> int:
        return len(self.file_data)


@dataclass(frozen=True)
class StoredImage:
    """Reference returned by a storage backend."""

    url: str
    public_id: str
