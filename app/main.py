# app/main.py

"""Himatikom Blog Backend - cookie-authenticated blog API over a single JSON document."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi.errors import RateLimitExceeded
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from app.clients import build_document_store
from app.configs import DEFAULT_ERROR_MESSAGE, Settings, get_settings
from app.errors import (
    BlogError,
    DocumentStoreError,
    PasswordHashingError,
    UploadError,
    UserAuthenticationError,
    auth_exception_handler,
    blog_exception_handler,
    error_response,
    password_hashing_exception_handler,
    store_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from app.managers import TokenManager, limiter, rate_limit_exceeded_handler
from app.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from app.monitoring import configure_logging, get_logger
from app.routes import auth_router, blog_router
from app.schemas import HealthCheckResponse
from app.services.storage import get_storage_service
from app.utils.helpers import host, today_str

logger = get_logger(__name__)


async def unhandled_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
    logger.exception(f"Unhandled error for ip: {host(request)} at endpoint {request.url.path}")
    return error_response(DEFAULT_ERROR_MESSAGE, HTTP_500_INTERNAL_SERVER_ERROR)


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application and its components from one settings object.

    Parameters
    ----------
    settings : Settings | None
        Explicit settings; read from the environment when omitted.
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Blog publishing API: public reads, admin-only writes.",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        swagger_ui_parameters={
            "docExpansion": "none",
            "operationsSorter": "method",
        },
    )

    app.state.settings = settings
    app.state.document_store = build_document_store(settings)
    app.state.storage = get_storage_service(settings)
    app.state.token_manager = TokenManager.from_settings(settings)
    app.state.limiter = limiter

    configure_cors(app, settings)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    _ = [app.include_router(router) for router in (auth_router, blog_router)]

    errors = [
        (UserAuthenticationError, auth_exception_handler),
        (BlogError, blog_exception_handler),
        (UploadError, upload_exception_handler),
        (DocumentStoreError, store_exception_handler),
        (PasswordHashingError, password_hashing_exception_handler),
        (RateLimitExceeded, rate_limit_exceeded_handler),
        (RequestValidationError, validation_exception_handler),
        (Exception, unhandled_exception_handler),
    ]
    _ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

    if settings.STORAGE_PROVIDER == "local":
        app.mount(
            settings.UPLOADS_URL_PREFIX,
            StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
            name="uploads",
        )

    @app.get(
        "/health",
        tags=["🩺 Health"],
        summary="Health check endpoint",
        response_model=HealthCheckResponse,
        response_class=ORJSONResponse,
        operation_id="health_check",
    )
    async def health_check(request: Request) -> HealthCheckResponse:
        """
        Report version and the configured backends.

        Examples
        --------
        Request
            GET /health
        Response
            200 OK
            {"status": "ok", "version": "1.0.0", "timestamp": "2025-01-01 10:00:00",
             "document_store": "local", "storage_provider": "local"}
        """
        return HealthCheckResponse(
            version=app.version,
            timestamp=today_str(),
            document_store=request.app.state.document_store.name,
            storage_provider=request.app.state.storage.name,
        )

    return app


app = create_app()


if __name__ == "__main__":
    from uvicorn import run

    run(
        app,
        host=get_settings().HOST,
        port=get_settings().PORT,
        log_level="info",
    )
