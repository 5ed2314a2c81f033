import os
import sys
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _should_load_env_file() -> str | None:
    """Determine if .env should be loaded.

    For local development, load `.env` automatically so `SECRET_KEY` and the
    mail credentials can be provided from `backend/.env`.

    Do NOT auto-load `.env` when running under pytest or in CI (so tests
    that validate missing secrets continue to fail fast).
    """
    if any("pytest" in str(x) for x in sys.argv if x):
        return None
    if os.environ.get("CI") in ("1", "true", "True"):
        return None
    return ".env"


class Settings(BaseSettings):
    # Environment configuration
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment: 'development', 'staging', 'production' or 'test'",
    )
    PORT: int = Field(default=5000, description="Port used by `python main.py`")

    DATABASE_URL: str = "sqlite:///./data/portfolio.db"
    SECRET_KEY: str = Field(
        ...,  # Required, no default
        description="JWT secret key - must be set via SECRET_KEY environment variable",
    )
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 24 * 60
    FRONTEND_URL: str = Field(
        default="http://localhost:3000",
        description="Allowed CORS origin outside development",
    )

    # Admin account seeded by init_db.py
    ADMIN_USERNAME: str = Field(default="admin")
    ADMIN_EMAIL: str = Field(default="admin@localhost")
    ADMIN_PASSWORD: str = Field(
        ...,  # Required, no default
        description="Admin password - must be set via ADMIN_PASSWORD environment variable",
    )

    # Database connection pool settings
    DB_POOL_SIZE: int = Field(
        default=5,
        description="Number of persistent connections in pool",
    )
    DB_MAX_OVERFLOW: int = Field(
        default=10,
        description="Extra connections when pool exhausted",
    )
    DB_POOL_TIMEOUT: int = Field(
        default=30,
        description="Seconds to wait for connection from pool",
    )
    DB_POOL_RECYCLE: int = Field(
        default=1800,
        description="Recycle connections after N seconds (30 min default)",
    )

    AUTO_CREATE_DB: bool = Field(
        default=False,
        description="When true, call Base.metadata.create_all on startup",
    )

    SLOW_REQUEST_THRESHOLD: float = Field(
        default=1.0,
        description="Log warning for requests slower than this (seconds)",
    )

    # Rate limits (limits library notation)
    RATE_LIMIT_GENERAL: str = Field(
        default="100/15minutes",
        description="Requests per address across public routes",
    )
    RATE_LIMIT_CONTACT: str = Field(
        default="5/hour",
        description="Contact form submissions per address",
    )
    TRUSTED_PROXIES: str = Field(
        default="",
        description=(
            "Comma-separated proxy addresses whose forwarding headers "
            "(CF-Connecting-IP, X-Real-IP, X-Forwarded-For) are honoured"
        ),
    )

    # Email Provider Settings
    EMAIL_PROVIDER: str = Field(
        default="console",
        description="Email provider: 'smtp', 'sendgrid', 'console'",
    )
    SMTP_HOST: str = Field(default="smtp.gmail.com", description="SMTP server hostname")
    SMTP_PORT: int = Field(default=587, description="SMTP server port")
    SMTP_USER: str = Field(default="", description="SMTP username")
    SMTP_PASSWORD: str = Field(default="", description="SMTP password")
    SMTP_FROM_EMAIL: str = Field(
        default="noreply@localhost",
        description="From email address",
    )
    SMTP_FROM_NAME: str = Field(default="Portfolio", description="From display name")
    SMTP_USE_TLS: bool = Field(
        default=True,
        description="Use STARTTLS for SMTP connection (port 587)",
    )
    SMTP_USE_SSL: bool = Field(
        default=False,
        description="Use implicit SSL for SMTP connection (port 465)",
    )
    SENDGRID_API_KEY: str = Field(
        default="",
        description="SendGrid API key (if using SendGrid provider)",
    )
    EMAIL_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Socket/HTTP timeout for a single send",
    )

    # Contact notifications
    CONTACT_RECIPIENT_EMAIL: str = Field(
        default="owner@localhost",
        description="Operator address receiving contact form alerts",
    )
    SITE_OWNER_NAME: str = Field(
        default="Portfolio Owner",
        description="Name used in acknowledgment emails",
    )
    SOCIAL_LINKS: str = Field(
        default="",
        description="Comma-separated Label=url pairs listed in acknowledgment emails",
    )

    # Uploads
    UPLOAD_DIR: str = Field(default="uploads", description="Directory for images")
    MAX_UPLOAD_SIZE: int = Field(
        default=5 * 1024 * 1024,
        description="Maximum upload size in bytes",
    )

    @property
    def social_links(self) -> Dict[str, str]:
        """Parse SOCIAL_LINKS into an ordered label -> URL mapping."""
        links: Dict[str, str] = {}
        for pair in self.SOCIAL_LINKS.split(","):
            if "=" not in pair:
                continue
            label, url = pair.split("=", 1)
            links[label.strip()] = url.strip()
        return links

    @property
    def trusted_proxies(self) -> set[str]:
        return {p.strip() for p in self.TRUSTED_PROXIES.split(",") if p.strip()}

    @property
    def cors_origins(self) -> list[str]:
        if self.ENVIRONMENT == "development":
            return ["*"]
        return [origin.strip() for origin in self.FRONTEND_URL.split(",")]

    model_config = SettingsConfigDict(
        env_file=_should_load_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",  # Allow extra env vars (e.g., SENTRY_DSN) without validation errors
    )


# Instantiating Settings() raises pydantic.ValidationError if SECRET_KEY isn't set.
settings = Settings()  # type: ignore[call-arg]


def get_settings() -> Settings:
    """Get the settings instance (for dependency injection)."""
    return settings
