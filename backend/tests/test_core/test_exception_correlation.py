"""Tests for exception correlation IDs and the portfolio exception hierarchy."""

import pytest

from core.correlation import set_correlation_id
from models.exceptions import (
    AlreadyExistsException,
    AuthenticationException,
    BlogPostNotFoundException,
    ContactNotFoundException,
    DomainException,
    DuplicateSlugException,
    EmailDeliveryException,
    FileTooLargeException,
    InvalidCredentialsException,
    InvalidTokenException,
    MissingTokenException,
    NotFoundException,
    NotificationException,
    PermissionDeniedException,
    ProjectNotFoundException,
    StorageException,
    UnsupportedFileTypeException,
    UploadException,
    ValidationException,
)


class TestDomainExceptionCorrelationId:
    """Tests for correlation ID in DomainException."""

    def setup_method(self) -> None:
        set_correlation_id("")

    def test_uses_context_correlation_id(self) -> None:
        set_correlation_id("context1")
        assert DomainException("Test error").correlation_id == "context1"

    def test_generates_id_when_no_context(self) -> None:
        exc = DomainException("Test error")
        assert len(exc.correlation_id) == 8
        assert all(c in "0123456789abcdef" for c in exc.correlation_id)

    def test_explicit_overrides_context(self) -> None:
        set_correlation_id("context_id")
        exc = DomainException("Test error", correlation_id="override")
        assert exc.correlation_id == "override"

    def test_ids_unique_without_context(self) -> None:
        assert DomainException("a").correlation_id != DomainException("b").correlation_id


class TestExceptionHierarchy:
    """Handlers in main.py map on these base classes."""

    @pytest.mark.parametrize(
        "exc,base",
        [
            (ContactNotFoundException(), NotFoundException),
            (ProjectNotFoundException(), NotFoundException),
            (BlogPostNotFoundException(), NotFoundException),
            (DuplicateSlugException("a"), AlreadyExistsException),
            (InvalidCredentialsException(), AuthenticationException),
            (MissingTokenException(), AuthenticationException),
            (InvalidTokenException(), PermissionDeniedException),
            (FileTooLargeException(5 * 1024 * 1024), UploadException),
            (UnsupportedFileTypeException(), UploadException),
            (EmailDeliveryException("a@b.com"), NotificationException),
            (StorageException("boom"), DomainException),
            (ValidationException("bad"), DomainException),
        ],
    )
    def test_subclassing(self, exc: DomainException, base: type) -> None:
        assert isinstance(exc, base)

    def test_default_messages(self) -> None:
        assert ContactNotFoundException().message == "Contact not found"
        assert MissingTokenException().message == "Access token required"
        assert FileTooLargeException(5 * 1024 * 1024).message == (
            "File too large. Maximum size is 5MB."
        )
        assert str(EmailDeliveryException("a@b.com")) == "Failed to send email to a@b.com"

    def test_context_id_inherited_by_subclasses(self) -> None:
        set_correlation_id("inherited")
        assert ProjectNotFoundException().correlation_id == "inherited"
        set_correlation_id("")
