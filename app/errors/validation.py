"""Request validation error handling for FastAPI."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from app.errors.base import error_response
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


def describe_errors(exc: RequestValidationError) -> str:
    """
    Flatten pydantic errors into one readable sentence.

    Examples
    --------
    ``[{"loc": ("body", "username"), "msg": "Field required"}]``
    becomes ``"username: Field required"``.
    """
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error.get("loc", [])[1:])  # Skip 'body'
        message = error.get("msg", "Invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "; ".join(parts) or "Invalid request"


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle request validation errors as ``400 {"error": ...}``.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.
    """
    detail = describe_errors(cast(RequestValidationError, exc))

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {detail}",
    )

    return error_response(detail, HTTP_400_BAD_REQUEST)
