"""Document store errors."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.errors.base import BaseAppError, error_response
from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)

STORE_UNAVAILABLE_MESSAGE = "The blog data store is unavailable. Please try again later."


class DocumentStoreError(BaseAppError):
    """
    Raised when the backing document cannot be read or written.

    ``reason`` names the file or bin involved and is only logged; clients
    always get the generic ``detail``.
    """

    def __init__(self, reason: str | None = None, *, operation: str = "load") -> None:
        super().__init__(STORE_UNAVAILABLE_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR)
        self.reason = reason or STORE_UNAVAILABLE_MESSAGE
        self.operation = operation

    def __str__(self) -> str:
        return self.reason


async def store_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    store_error = cast(DocumentStoreError, exc)
    logger.error(
        f"Store {store_error.operation} failed for ip: {host(request)} "
        f"at endpoint {request.url.path}: {store_error.reason}",
    )
    return error_response(store_error.detail, store_error.status_code)
