# ruff: noqa: E402
# E402 disabled: load_dotenv() must run before other imports for Sentry DSN

import os
import time
from collections.abc import Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import sentry_sdk
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from core.correlation import (
    CORRELATION_HEADER,
    generate_correlation_id,
    get_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)
from core.logging_config import configure_logging
from core.sentry_config import init_sentry
from helpers.rate_limiter import GENERAL_LIMIT_MESSAGE, general_limit, limiter
from helpers.security_headers import SecurityHeadersMiddleware
from models.config import settings
from models.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    DomainException,
    NotFoundException,
    NotificationException,
    PermissionDeniedException,
    StorageException,
    UploadException,
    ValidationException,
)
from models.schemas import HealthResponse
from repositories.database import Base, engine
from routers import (
    admin_router,
    analytics_router,
    blog_router,
    contact_router,
    projects_router,
)
from services.contact_service import DELIVERY_FAILED_MESSAGE

API_VERSION = "1.0.0"

# Initialize Sentry BEFORE app creation
init_sentry()

# Configure logging with Loguru
configure_logging(os.getenv("ENVIRONMENT", "development"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler.

    - Optionally create tables when `AUTO_CREATE_DB` is enabled (development).
    - Make sure the upload directory exists.
    """
    if settings.AUTO_CREATE_DB:
        logger.info(
            "AUTO_CREATE_DB enabled; creating database tables via SQLAlchemy create_all()"
        )
        Base.metadata.create_all(bind=engine)
    else:
        logger.info("AUTO_CREATE_DB disabled; skipping automatic create_all()")

    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    logger.info(f"Portfolio API {API_VERSION} started ({settings.ENVIRONMENT})")

    yield

    logger.info("Portfolio API shutting down")


app = FastAPI(title="Portfolio API", version=API_VERSION, lifespan=lifespan)

# Attach rate limiter to app
app.state.limiter = limiter


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Inject correlation ID into request context and Sentry."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        correlation_id = resolve_correlation_id(request.headers.get(CORRELATION_HEADER))
        set_correlation_id(correlation_id)
        sentry_sdk.set_tag("correlation_id", correlation_id)

        response = await call_next(request)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log all incoming requests with performance monitoring."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start_time = time.perf_counter()

        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)

        duration = time.perf_counter() - start_time
        logger.info(
            f"Response: {request.method} {request.url.path} "
            f"status={response.status_code} duration={duration:.3f}s"
        )

        if duration > settings.SLOW_REQUEST_THRESHOLD:
            logger.warning(
                f"Slow request: {request.method} {request.url.path} "
                f"took {duration:.2f}s (threshold: {settings.SLOW_REQUEST_THRESHOLD}s)"
            )

        response.headers["X-Response-Time"] = f"{duration:.3f}s"
        return response


# Middleware runs in reverse order - security headers wrap everything
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(CorrelationIdMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# In development, allow all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.ENVIRONMENT != "development",
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded project images
# Directory is created in lifespan
app.mount(
    "/uploads",
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


def _error_response(
    status_code: int,
    detail: str,
    correlation_id: str,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "correlation_id": correlation_id},
        headers=headers,
    )


# Global unhandled exception handler (returns generic 500 and logs details)
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch all unhandled exceptions with full Sentry capture."""
    correlation_id = get_correlation_id() or generate_correlation_id()

    sentry_sdk.set_tag("correlation_id", correlation_id)
    sentry_sdk.capture_exception(exc)

    logger.bind(path=str(request.url.path), method=request.method).exception(
        f"Unhandled exception: {exc!r}"
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error", correlation_id
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies and query parameters are client errors (400)."""
    correlation_id = get_correlation_id() or generate_correlation_id()
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"Invalid request: {location}: {first.get('msg', 'invalid value')}"
    else:
        detail = "Invalid request"

    logger.bind(path=str(request.url.path)).warning(
        f"Request validation failed: {detail}"
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, detail, correlation_id)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Framework HTTP errors (unknown routes, wrong methods) in the common shape."""
    correlation_id = get_correlation_id() or generate_correlation_id()
    detail = (
        "Route not found"
        if exc.status_code == status.HTTP_404_NOT_FOUND
        else str(exc.detail)
    )
    return _error_response(
        exc.status_code, detail, correlation_id, getattr(exc, "headers", None)
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(
    request: Request, exc: RateLimitExceeded
) -> JSONResponse:
    """Handle slowapi limit breaches with the limit's fixed message."""
    correlation_id = get_correlation_id() or generate_correlation_id()
    error_message = getattr(exc.limit, "error_message", None)
    detail = error_message if isinstance(error_message, str) else GENERAL_LIMIT_MESSAGE

    logger.warning(
        f"Rate limit exceeded: {exc.detail}", path=str(request.url.path)
    )
    return _error_response(status.HTTP_429_TOO_MANY_REQUESTS, detail, correlation_id)


# Centralized exception handlers
@app.exception_handler(NotFoundException)
async def not_found_exception_handler(
    request: Request, exc: NotFoundException
) -> JSONResponse:
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    logger.warning(
        f"Not found: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(status.HTTP_404_NOT_FOUND, exc.message, exc.correlation_id)


@app.exception_handler(AlreadyExistsException)
async def already_exists_exception_handler(
    request: Request, exc: AlreadyExistsException
) -> JSONResponse:
    logger.warning(
        f"Already exists: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(status.HTTP_409_CONFLICT, exc.message, exc.correlation_id)


@app.exception_handler(ValidationException)
async def validation_exception_handler(
    request: Request, exc: ValidationException
) -> JSONResponse:
    logger.warning(
        f"Validation error: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.correlation_id)


@app.exception_handler(UploadException)
async def upload_exception_handler(
    request: Request, exc: UploadException
) -> JSONResponse:
    logger.warning(f"Upload rejected: {exc.message}", path=str(request.url.path))
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.correlation_id)


@app.exception_handler(PermissionDeniedException)
async def permission_denied_exception_handler(
    request: Request, exc: PermissionDeniedException
) -> JSONResponse:
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    logger.warning(
        f"Permission denied: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(status.HTTP_403_FORBIDDEN, exc.message, exc.correlation_id)


@app.exception_handler(AuthenticationException)
async def authentication_exception_handler(
    request: Request, exc: AuthenticationException
) -> JSONResponse:
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    logger.warning(
        f"Authentication failed: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(
        status.HTTP_401_UNAUTHORIZED,
        exc.message,
        exc.correlation_id,
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(StorageException)
async def storage_exception_handler(
    request: Request, exc: StorageException
) -> JSONResponse:
    """Database write failures: details go to the log, the client gets a generic 500."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.capture_exception(exc)
    logger.error(f"Storage failure: {exc.message}", path=str(request.url.path))
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        exc.correlation_id,
    )


@app.exception_handler(NotificationException)
async def notification_exception_handler(
    request: Request, exc: NotificationException
) -> JSONResponse:
    """Outbound email failures after the submission was stored."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.capture_exception(exc)
    logger.error(f"Email delivery failed: {exc.message}", path=str(request.url.path))
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        DELIVERY_FAILED_MESSAGE,
        exc.correlation_id,
    )


@app.exception_handler(DomainException)
async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle any other domain exception."""
    sentry_sdk.set_tag("correlation_id", exc.correlation_id)
    sentry_sdk.capture_exception(exc)
    logger.warning(
        f"Domain exception: {exc.message}",
        exception_type=exc.__class__.__name__,
        path=str(request.url.path),
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.correlation_id)


app.include_router(contact_router.router, prefix="/api")
app.include_router(analytics_router.router, prefix="/api")
app.include_router(admin_router.router, prefix="/api")
app.include_router(projects_router.router, prefix="/api")
app.include_router(blog_router.router, prefix="/api")


@app.get("/api/health", response_model=HealthResponse)
@general_limit
def health_check(request: Request) -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="OK",
        timestamp=datetime.now(timezone.utc),
        version=API_VERSION,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)
