# app/middleware/middleware.py
"""
Middleware components for the blog backend.

This module contains middleware for security headers, request logging
and CORS handling, plus the lifespan handler that logs startup and
releases the document store's network client on shutdown.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from app.configs.settings import Settings
from app.monitoring import bind_request_id, clear_context, get_logger
from app.utils.helpers import get_summary, host

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Log startup and close store resources on shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {app.title} ({settings.ENVIRONMENT})...")
    logger.info(f"Document store: {app.state.document_store.name}")
    logger.info(f"Image storage: {app.state.storage.name}")

    yield

    logger.info(f"Shutting down {app.title}...")
    try:
        await app.state.document_store.close()
    except OSError:
        logger.exception("Error during document store cleanup")


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Allow the frontend origin to call the API with credentials (cookies)."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
    ]

    if frontend_url := settings.FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        bind_request_id(request_id)

        try:
            route_info = get_summary(request) or f"{request.method} {request.url.path}"
            logger.info(f"Request: {route_info}, from ip: {host(request)}")

            response = await call_next(request)
            duration = perf_counter() - start_time

            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path} "
                f"in {duration:.2f}s",
            )
            response.headers["X-Request-ID"] = request_id
            return response
        finally:
            clear_context()


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
