"""
HTML sanitization for admin-authored content.

Blog bodies keep a small formatting vocabulary; titles, excerpts and tags are
reduced to plain text; links are restricted to safe schemes.
"""

from typing import Iterable, List, Optional

import bleach

# Formatting vocabulary for blog post bodies
POST_TAGS = [
    "p",
    "br",
    "h2",
    "h3",
    "h4",
    "strong",
    "b",
    "em",
    "i",
    "u",
    "ul",
    "ol",
    "li",
    "blockquote",
    "code",
    "pre",
    "a",
    "img",
]

POST_ATTRIBUTES: dict[str, list[str]] = {
    "a": ["href", "title"],
    "img": ["src", "alt"],
}

POST_PROTOCOLS = ["http", "https", "mailto"]

_SAFE_URL_PREFIXES = ("http://", "https://", "mailto:")


def sanitize_post_html(content: Optional[str]) -> Optional[str]:
    """
    Clean a blog post body.

    Examples:
        >>> sanitize_post_html('<p onclick="x()">Hi<script>alert(1)</script></p>')
        '<p>Hialert(1)</p>'
        >>> sanitize_post_html('<a href="javascript:alert(1)">x</a>')
        '<a>x</a>'
    """
    if content is None:
        return None

    return bleach.clean(
        content,
        tags=POST_TAGS,
        attributes=POST_ATTRIBUTES,
        protocols=POST_PROTOCOLS,
        strip=True,
    )


def sanitize_plain_text(content: Optional[str]) -> Optional[str]:
    """
    Strip all HTML tags for plain text fields.

    Examples:
        >>> sanitize_plain_text('<b>Bold</b> title')
        'Bold title'
    """
    if content is None:
        return None

    return bleach.clean(content, tags=[], strip=True).strip()


def sanitize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    """Plain-text, de-duplicated, non-empty tags in their original order."""
    cleaned: List[str] = []
    for tag in tags or []:
        value = sanitize_plain_text(tag)
        if value and value not in cleaned:
            cleaned.append(value)
    return cleaned


def sanitize_url(url: Optional[str]) -> Optional[str]:
    """
    Reject javascript: and other non-web schemes; site-relative paths pass.

    Examples:
        >>> sanitize_url('javascript:alert(1)')
        ''
        >>> sanitize_url('/uploads/image.png')
        '/uploads/image.png'
    """
    if url is None:
        return None

    url = url.strip()
    if not url:
        return url

    if url.lower().startswith(_SAFE_URL_PREFIXES):
        return url

    # Relative URLs have no scheme before the first slash
    if url.startswith("/") or ":" not in url.split("/")[0]:
        return url
    return ""
