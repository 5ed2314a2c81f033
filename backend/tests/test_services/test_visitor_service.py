"""Tests for VisitorTracker."""

from unittest.mock import MagicMock, patch

import repositories.db_models as db_models
from models.config import settings
from services.visitor_service import VisitorTracker

CHROME_MOBILE = (
    "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Mobile Safari/537.36"
)


class TestVisitorTracker:
    """Test cases for recording visits."""

    def test_first_visit_creates_visitor(self, db_session) -> None:
        VisitorTracker(db_session).track(
            "203.0.113.5", "/api/blog", CHROME_MOBILE, "https://news.example.com/"
        )

        visitor = db_session.query(db_models.Visitor).one()
        assert visitor.ip_address == "203.0.113.5"
        assert visitor.browser == "Chrome 120"
        assert visitor.device == "mobile"
        assert visitor.referrer == "https://news.example.com/"
        assert visitor.is_returning_visitor is False
        assert [v.page for v in visitor.visits] == ["/api/blog"]

    def test_repeat_visit_appends_event(self, db_session) -> None:
        tracker = VisitorTracker(db_session)
        tracker.track("203.0.113.5", "/api/blog")
        tracker.track("203.0.113.5", "/api/projects")

        visitor = db_session.query(db_models.Visitor).one()
        assert visitor.is_returning_visitor is True
        assert [v.page for v in visitor.visits] == ["/api/blog", "/api/projects"]

    def test_missing_address_is_ignored(self, db_session) -> None:
        VisitorTracker(db_session).track(None, "/api/blog")
        assert db_session.query(db_models.Visitor).count() == 0

    def test_storage_failure_is_swallowed(self, db_session) -> None:
        """A broken tracker must never fail the request being served."""
        tracker = VisitorTracker(db_session)

        with patch.object(
            tracker.repo, "record_visit", side_effect=RuntimeError("disk full")
        ):
            tracker.track("203.0.113.5", "/api/blog")

        # Session is still usable afterwards
        tracker.track("203.0.113.6", "/api/blog")
        assert db_session.query(db_models.Visitor).count() == 1

    def test_track_request_reads_headers(self, db_session, monkeypatch) -> None:
        monkeypatch.setattr(settings, "TRUSTED_PROXIES", "10.0.0.7")
        request = MagicMock()
        request.client.host = "10.0.0.7"
        request.headers = {
            "X-Real-IP": "198.51.100.3",
            "User-Agent": "curl/8.4.0",
            "Referer": "https://example.org/",
        }
        request.url.path = "/api/projects"

        VisitorTracker(db_session).track_request(request)

        visitor = db_session.query(db_models.Visitor).one()
        assert visitor.ip_address == "198.51.100.3"
        assert visitor.device == "bot"
        assert visitor.visits[0].page == "/api/projects"
