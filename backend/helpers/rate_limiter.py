"""Rate limiter configuration module.

This module is separate from main.py to avoid circular imports when routers
need to access the limiter.
"""

from slowapi import Limiter

from helpers.request_utils import get_rate_limit_key
from models.config import settings

GENERAL_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
CONTACT_LIMIT_MESSAGE = "Too many contact form submissions, please try again later."

# Create rate limiter - imported by routers and main.py
limiter = Limiter(key_func=get_rate_limit_key)

# One bucket per address shared by every public route that applies it
general_limit = limiter.shared_limit(
    settings.RATE_LIMIT_GENERAL,
    scope="general",
    error_message=GENERAL_LIMIT_MESSAGE,
)

contact_limit = limiter.limit(
    settings.RATE_LIMIT_CONTACT,
    error_message=CONTACT_LIMIT_MESSAGE,
)
