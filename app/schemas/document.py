"""
Persisted document models.

The whole application state is one JSON document of the shape
``{"blogs": [...], "users": [...]}``. These models describe it; any other
top-level keys found in the stored document are kept as extras so a
rewrite never drops them.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.helpers import utc_now


def _as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class BlogPost(BaseModel):
    """A stored blog post."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., ge=1, description="Blog ID, assigned as max(existing) + 1")
    title: str
    slug: str | None = Field(default=None, description="Derived from title, not unique")
    content: str
    author: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = None
    image_url: str | None = None
    image_public_id: str | None = Field(
        default=None,
        description="Storage handle used only to delete the image",
    )

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        """Treat naive timestamps from older documents as UTC."""
        return _as_utc(value)


class UserAccount(BaseModel):
    """The admin account able to log in. Never mutated by the API."""

    model_config = ConfigDict(extra="ignore")

    id: int
    username: str
    password: str = Field(..., description="Password hash")
    role: str = "admin"
    created_at: datetime = Field(default_factory=utc_now)

    @field_validator("created_at")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        return _as_utc(value)


class Document(BaseModel):
    """The entire persisted state."""

    model_config = ConfigDict(extra="allow")

    blogs: list[BlogPost] = Field(default_factory=list)
    users: list[UserAccount] = Field(default_factory=list)

    def find_blog(self, blog_id: int) -> BlogPost | None:
        return next((blog for blog in self.blogs if blog.id == blog_id), None)

    def find_user(self, username: str) -> UserAccount | None:
        return next((user for user in self.users if user.username == username), None)

    def next_blog_id(self) -> int:
        return max((blog.id for blog in self.blogs), default=0) + 1

    def next_user_id(self) -> int:
        return max((user.id for user in self.users), default=0) + 1
