"""
Security headers middleware for FastAPI.

Adds standard security headers to every response. API responses are marked
non-cacheable; uploaded images keep whatever caching StaticFiles sets.
"""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from models.config import settings

BASE_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Permissions-Policy": "camera=(), geolocation=(), microphone=(), payment=()",
    # JSON and images only
    "Content-Security-Policy": (
        "default-src 'none'; img-src 'self'; frame-ancestors 'none'"
    ),
}

HSTS_VALUE = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware that adds security headers to all responses."""

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        response = await call_next(request)

        for name, value in BASE_HEADERS.items():
            response.headers[name] = value

        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = HSTS_VALUE

        if request.url.path.startswith("/api") and (
            "Cache-Control" not in response.headers
        ):
            response.headers["Cache-Control"] = "no-store, max-age=0"

        return response
