"""
Request utilities for extracting client information.

Provides helpers to extract IP addresses, user agent and referrer strings
from HTTP requests. Proxy headers are only read when the socket peer is a
configured trusted proxy.
"""

import ipaddress
from typing import Optional

from slowapi.util import get_remote_address
from starlette.requests import Request

from models.config import settings

# Fits the ip_address columns (longest textual IPv6 form)
MAX_ADDRESS_LENGTH = 45

PROXY_HEADERS = ("CF-Connecting-IP", "X-Real-IP")


def _parse_address(value: Optional[str]) -> Optional[str]:
    """Return the stripped value if it is a literal IPv4/IPv6 address."""
    if not value:
        return None
    candidate = value.strip()
    try:
        ipaddress.ip_address(candidate)
    except ValueError:
        return None
    return candidate


def get_client_ip(request: Request) -> Optional[str]:
    """
    Extract the client's IP address from the request.

    When the direct peer is listed in TRUSTED_PROXIES, forwarding headers
    are consulted in order of precedence:
    1. CF-Connecting-IP (Cloudflare)
    2. X-Real-IP (nginx)
    3. X-Forwarded-For (standard proxy header, first IP)

    Header values that are not valid IP addresses are ignored. Otherwise
    the socket peer (client.host) is used.

    Args:
        request: Incoming request

    Returns:
        Client IP address or None if not available
    """
    peer = request.client.host if request.client else None
    if not peer:
        return None

    if peer in settings.trusted_proxies:
        for header in PROXY_HEADERS:
            address = _parse_address(request.headers.get(header))
            if address:
                return address

        # Comma-separated, first entry is the original client
        forwarded_for = request.headers.get("X-Forwarded-For")
        if forwarded_for:
            address = _parse_address(forwarded_for.split(",")[0])
            if address:
                return address

    return peer[:MAX_ADDRESS_LENGTH]


def get_rate_limit_key(request: Request) -> str:
    """Key used by the rate limiter: the resolved client, else the socket peer."""
    return get_client_ip(request) or get_remote_address(request)


def get_user_agent(request: Request) -> Optional[str]:
    """
    Extract the user agent string from the request.

    Truncated to 500 characters to fit the database column.
    """
    user_agent = request.headers.get("User-Agent")
    if user_agent:
        return user_agent[:500]
    return None


def get_referrer(request: Request) -> Optional[str]:
    """Extract the Referer header, truncated to 500 characters."""
    referrer = request.headers.get("Referer")
    if referrer:
        return referrer[:500]
    return None
