# app/managers/rate_limiter.py

"""Rate limiter configuration using slowapi (in-memory storage)."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from app.monitoring import get_logger
from app.utils.helpers import host

logger = get_logger(__name__)


def get_identifier(request: Request) -> str:
    """Rate limit per client IP."""
    return f"ip:{get_remote_address(request)}"


limiter = Limiter(key_func=get_identifier)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        JSON response with error details.
    """
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(f"Rate limit hit for ip: {host(request)} at endpoint {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={"error": f"Rate limit exceeded: {http_exc.detail}"},
    )
