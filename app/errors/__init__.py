from app.errors.auth import (
    AuthInvalidError,
    AuthMissingError,
    InvalidCredentialsError,
    UserAuthenticationError,
    auth_exception_handler,
)
from app.errors.base import BaseAppError, create_exception_handler, error_response
from app.errors.blog import (
    BlogError,
    BlogNotFoundError,
    RequiredFieldError,
    blog_exception_handler,
)
from app.errors.password_hasher import PasswordHashingError, password_hashing_exception_handler
from app.errors.store import DocumentStoreError, store_exception_handler
from app.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from app.errors.validation import validation_exception_handler

__all__ = [
    "AuthInvalidError",
    "AuthMissingError",
    "BaseAppError",
    "BlogError",
    "BlogNotFoundError",
    "DocumentStoreError",
    "ImageTooLargeError",
    "InvalidCredentialsError",
    "InvalidImageError",
    "PasswordHashingError",
    "RequiredFieldError",
    "StorageError",
    "UnsupportedImageTypeError",
    "UploadError",
    "UserAuthenticationError",
    "auth_exception_handler",
    "blog_exception_handler",
    "create_exception_handler",
    "error_response",
    "password_hashing_exception_handler",
    "store_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
