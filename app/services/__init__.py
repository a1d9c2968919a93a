from app.services.auth import AuthService
from app.services.blog import BlogService
from app.services.media import MediaService

__all__ = ["AuthService", "BlogService", "MediaService"]
