"""Authentication errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from app.errors.base import BaseAppError, create_exception_handler
from app.monitoring import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised on a bad login, whether the username or the password was wrong."""

    def __init__(self) -> None:
        super().__init__("invalid username or password", HTTP_401_UNAUTHORIZED)


class AuthMissingError(UserAuthenticationError):
    """Raised when a protected route is called without a session cookie."""

    def __init__(self) -> None:
        super().__init__("authentication token not found", HTTP_401_UNAUTHORIZED)


class AuthInvalidError(UserAuthenticationError):
    """Raised when the session cookie is tampered with or expired."""

    def __init__(self) -> None:
        super().__init__("invalid or expired authentication token", HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
