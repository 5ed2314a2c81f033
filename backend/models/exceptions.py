"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP responses
by centralized exception handlers in main.py, keeping services HTTP-agnostic.

Each exception carries a correlation ID so a user-reported error can be matched
to the server log line and the Sentry event.
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        # Use request correlation ID if available, otherwise generate new one
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    pass


class PermissionDeniedException(DomainException):
    """Raised when a presented credential is invalid or expired."""

    pass


class ValidationException(DomainException):
    """Raised when input validation fails."""

    pass


class AuthenticationException(DomainException):
    """Raised when authentication is missing or credentials are wrong."""

    pass


class AlreadyExistsException(DomainException):
    """Raised when trying to create a resource that already exists."""

    pass


class StorageException(DomainException):
    """Raised when a database write fails."""

    pass


# Specific exceptions for domain entities


class ContactNotFoundException(NotFoundException):
    """Contact submission not found."""

    def __init__(self, message: str = "Contact not found"):
        super().__init__(message)


class ProjectNotFoundException(NotFoundException):
    """Project not found."""

    def __init__(self, message: str = "Project not found"):
        super().__init__(message)


class BlogPostNotFoundException(NotFoundException):
    """Blog post not found."""

    def __init__(self, message: str = "Blog post not found"):
        super().__init__(message)


class DuplicateSlugException(AlreadyExistsException):
    """A blog post with this slug already exists."""

    def __init__(self, slug: str) -> None:
        super().__init__(f"A blog post with slug '{slug}' already exists")
        self.slug = slug


class InvalidCredentialsException(AuthenticationException):
    """Invalid username or password."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class MissingTokenException(AuthenticationException):
    """No bearer token was presented."""

    def __init__(self, message: str = "Access token required"):
        super().__init__(message)


class InvalidTokenException(PermissionDeniedException):
    """Bearer token failed signature/expiry checks or names an unknown account."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message)


# ============================================================================
# Upload Exceptions
# ============================================================================


class UploadException(DomainException):
    """Base exception for rejected file uploads."""

    pass


class FileTooLargeException(UploadException):
    """Upload exceeds the configured size limit."""

    def __init__(self, max_size: int) -> None:
        super().__init__(
            f"File too large. Maximum size is {max_size // (1024 * 1024)}MB."
        )
        self.max_size = max_size


class UnsupportedFileTypeException(UploadException):
    """Upload is not an allowed image type."""

    def __init__(self, message: str = "Only image files are allowed!"):
        super().__init__(message)


# ============================================================================
# Notification Exceptions
# ============================================================================


class NotificationException(DomainException):
    """Raised when an outbound notification could not be delivered."""

    pass


class EmailDeliveryException(NotificationException):
    """Raised when the mail transport fails to send a message."""

    def __init__(self, recipient: str, message: str | None = None) -> None:
        super().__init__(message or f"Failed to send email to {recipient}")
        self.recipient = recipient
