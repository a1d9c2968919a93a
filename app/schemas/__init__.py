from app.schemas.auth import AuthStatus, LoginRequest, TokenData
from app.schemas.blog import BlogSummary, ImageUpload, MessageResponse, StoredImage
from app.schemas.document import BlogPost, Document, UserAccount
from app.schemas.health import HealthCheckResponse

__all__ = [
    "AuthStatus",
    "BlogPost",
    "BlogSummary",
    "Document",
    "HealthCheckResponse",
    "ImageUpload",
    "LoginRequest",
    "MessageResponse",
    "StoredImage",
    "TokenData",
    "UserAccount",
]
