"""
User agent parsing for visitor records.

Simple regex-based detection of browser family and device class.
"""

import re
from typing import Optional, TypedDict

# Order matters: Edge and Opera UAs also contain "Chrome", Chrome UAs contain "Safari"
_BROWSER_PATTERNS = [
    (r"Edg(?:e|A|iOS)?/(\d+)", "Edge"),
    (r"(?:OPR|Opera)/(\d+)", "Opera"),
    (r"Firefox/(\d+)", "Firefox"),
    (r"(?:Chrome|CriOS)/(\d+)", "Chrome"),
    (r"Version/(\d+).*Safari/", "Safari"),
    (r"MSIE (\d+)", "Internet Explorer"),
    (r"Trident.*rv:(\d+)", "Internet Explorer"),
]

_BOT_PATTERN = re.compile(r"bot|crawl|spider|slurp|curl|wget|python-requests|httpx", re.I)


class ParsedUserAgent(TypedDict):
    browser: Optional[str]
    device: Optional[str]


def parse_user_agent(user_agent: Optional[str]) -> ParsedUserAgent:
    """
    Derive browser and device class from a user agent string.

    Args:
        user_agent: Raw User-Agent header value

    Returns:
        Dict with "browser" (e.g. "Chrome 120") and "device" (one of
        "desktop", "mobile", "tablet", "bot"); both None when the header is
        missing

    Examples:
        >>> parse_user_agent("Mozilla/5.0 (Windows NT 10.0) Chrome/120.0 Safari/537.36")
        {'browser': 'Chrome 120', 'device': 'desktop'}
        >>> parse_user_agent(None)
        {'browser': None, 'device': None}
    """
    if not user_agent:
        return {"browser": None, "device": None}

    browser = "Unknown"
    for pattern, name in _BROWSER_PATTERNS:
        match = re.search(pattern, user_agent)
        if match:
            browser = f"{name} {match.group(1)}"
            break

    if _BOT_PATTERN.search(user_agent):
        device = "bot"
    elif "iPad" in user_agent or "Tablet" in user_agent:
        device = "tablet"
    elif "Mobile" in user_agent or "Android" in user_agent or "iPhone" in user_agent:
        device = "mobile"
    else:
        device = "desktop"

    return {"browser": browser, "device": device}
