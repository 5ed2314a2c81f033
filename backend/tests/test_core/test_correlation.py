"""Tests for correlation ID generation and context management."""

import re

from core.correlation import (
    correlation_id_var,
    generate_correlation_id,
    get_correlation_id,
    resolve_correlation_id,
    set_correlation_id,
)


class TestGenerateCorrelationId:
    """Tests for generate_correlation_id function."""

    def test_returns_8_lowercase_hex_characters(self) -> None:
        """Correlation ID should be 8 lowercase hex characters."""
        assert re.match(r"^[0-9a-f]{8}$", generate_correlation_id())

    def test_generates_unique_ids(self) -> None:
        """Each call should generate a unique ID."""
        ids = {generate_correlation_id() for _ in range(1000)}
        assert len(ids) == 1000


class TestCorrelationIdContext:
    """Tests for correlation ID context management."""

    def test_set_and_get_correlation_id(self) -> None:
        set_correlation_id("abc12345")
        assert get_correlation_id() == "abc12345"

    def test_get_returns_empty_string_when_not_set(self) -> None:
        correlation_id_var.set("")
        assert get_correlation_id() == ""


class TestResolveCorrelationId:
    """Tests for choosing the ID of an incoming request."""

    def test_keeps_safe_incoming_id(self) -> None:
        """A frontend-supplied token is reused so both sides log the same ID."""
        assert resolve_correlation_id("frontend-req_42") == "frontend-req_42"

    def test_generates_when_header_missing(self) -> None:
        assert re.match(r"^[0-9a-f]{8}$", resolve_correlation_id(None))

    def test_rejects_header_injection(self) -> None:
        """IDs with spaces, newlines or markup are replaced."""
        for bad in ["abc\r\nSet-Cookie: x", "<script>", "a b", "x" * 65, ""]:
            resolved = resolve_correlation_id(bad)
            assert resolved != bad
            assert re.match(r"^[0-9a-f]{8}$", resolved)
