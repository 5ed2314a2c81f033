"""
Correlation IDs for matching error responses to log lines.

Every request gets a short ID (taken from the caller's `X-Correlation-ID`
header when present) that is stored in a context variable, echoed back in the
response headers and attached to every log record and error body.
"""

import re
import uuid
from contextvars import ContextVar

CORRELATION_HEADER = "X-Correlation-ID"

# Request-scoped correlation ID
correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")

# Incoming IDs are echoed into headers and logs, so only accept short tokens
_VALID_INCOMING = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def generate_correlation_id() -> str:
    """
    Generate a short, unique correlation ID.

    Returns:
        8-character hexadecimal string (e.g., "abc123de").
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the current request's correlation ID, or "" outside a request."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set the correlation ID for the current context."""
    correlation_id_var.set(correlation_id)


def resolve_correlation_id(incoming: str | None) -> str:
    """
    Pick the correlation ID for a new request.

    Args:
        incoming: Value of the X-Correlation-ID request header, if any.

    Returns:
        The incoming ID when it is a safe token, otherwise a fresh one.
    """
    if incoming and _VALID_INCOMING.match(incoming):
        return incoming
    return generate_correlation_id()
