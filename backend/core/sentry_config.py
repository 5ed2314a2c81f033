"""
Sentry SDK configuration.

Sentry stays disabled unless SENTRY_DSN is set. Contact form submissions carry
visitor PII (names, emails, free-text messages), so request bodies, cookies
and credentials are scrubbed before events leave the process.
"""

import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.types import Event, Hint

SKIPPED_TRANSACTIONS = {"/api/health", "GET /api/health"}


def _before_send(event: Event, hint: Hint) -> Event | None:
    """
    Scrub PII before sending to Sentry.

    Args:
        event: Sentry event.
        hint: Additional context about the event.

    Returns:
        Modified event with PII removed.
    """
    user = event.get("user")
    if user:
        user.pop("email", None)
        user.pop("username", None)
        if "ip_address" in user:
            user["ip_address"] = "{{auto}}"

    request = event.get("request")
    if request and isinstance(request, dict):
        request.pop("cookies", None)
        # Contact bodies hold names, emails and messages
        if "data" in request:
            request["data"] = "[Filtered]"
        headers = request.get("headers")
        if isinstance(headers, dict):
            for header in ("Authorization", "authorization"):
                if header in headers:
                    headers[header] = "[Filtered]"

    return event


def _before_send_transaction(event: Event, hint: Hint) -> Event | None:
    """Drop health-check transactions."""
    if event.get("transaction", "") in SKIPPED_TRANSACTIONS:
        return None
    return event


def _traces_sampler(sampling_context: dict[str, Any]) -> float:
    """
    Sample rate per request.

    Args:
        sampling_context: Context about the request being sampled.

    Returns:
        Sample rate between 0.0 and 1.0.
    """
    if sampling_context.get("parent_sampled") is True:
        return 1.0

    asgi_scope = sampling_context.get("asgi_scope", {})
    path = asgi_scope.get("path", "")

    if path == "/api/health":
        return 0.0

    # Contact submissions and admin actions are low volume and worth tracing
    if path.startswith("/api/contact") or path.startswith("/api/admin"):
        return 0.5

    return 0.1


def init_sentry() -> None:
    """
    Initialize Sentry SDK with FastAPI integration.

    Call this BEFORE creating the FastAPI app instance.
    """
    dsn = os.getenv("SENTRY_DSN")

    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=os.getenv("SENTRY_RELEASE", "unknown"),
        send_default_pii=False,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoguruIntegration(),
        ],
        traces_sampler=_traces_sampler,
        sample_rate=1.0,
        before_send=_before_send,
        before_send_transaction=_before_send_transaction,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )
