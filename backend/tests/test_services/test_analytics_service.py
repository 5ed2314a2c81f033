"""Tests for AnalyticsService."""

from datetime import datetime, timedelta, timezone

import repositories.db_models as db_models
from services.analytics_service import AnalyticsService


class TestGetDashboard:
    def test_empty_database(self, db_session) -> None:
        dashboard = AnalyticsService.get_dashboard(db_session)

        assert dashboard.total_visitors == 0
        assert dashboard.total_contacts == 0
        assert dashboard.recent_contacts == []
        assert dashboard.visitor_stats == []
        assert dashboard.contact_stats == []

    def test_visitor_stats_by_day_most_recent_first(self, db_session) -> None:
        today = datetime.now(timezone.utc).replace(hour=12)
        for offset, count in [(0, 2), (1, 1), (3, 3)]:
            for i in range(count):
                db_session.add(
                    db_models.Visitor(
                        ip_address=f"10.0.{offset}.{i}",
                        created_at=today - timedelta(days=offset),
                    )
                )
        db_session.commit()

        stats = AnalyticsService.get_dashboard(db_session).visitor_stats

        assert [s.count for s in stats] == [2, 1, 3]
        assert stats[0].date == today.date().isoformat()
        assert stats[2].date == (today - timedelta(days=3)).date().isoformat()

    def test_visitor_stats_capped_at_thirty_days(self, db_session) -> None:
        start = datetime(2026, 1, 1, 12, tzinfo=timezone.utc)
        for offset in range(35):
            db_session.add(
                db_models.Visitor(
                    ip_address=f"10.1.0.{offset}",
                    created_at=start + timedelta(days=offset),
                )
            )
        db_session.commit()

        dashboard = AnalyticsService.get_dashboard(db_session)

        assert dashboard.total_visitors == 35
        assert len(dashboard.visitor_stats) == 30
        assert dashboard.visitor_stats[0].date == "2026-02-04"

    def test_contact_stats(self, db_session, create_contact) -> None:
        create_contact()
        create_contact(status=db_models.ContactStatus.READ)
        create_contact(status=db_models.ContactStatus.READ)

        stats = AnalyticsService.get_dashboard(db_session).contact_stats

        assert {s.status: s.count for s in stats} == {
            db_models.ContactStatus.NEW: 1,
            db_models.ContactStatus.READ: 2,
        }
