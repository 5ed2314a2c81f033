"""
Analytics service for the admin dashboard.
"""

from sqlalchemy.orm import Session

from models.schemas import (
    AnalyticsResponse,
    ContactSummary,
    DailyCount,
    StatusCount,
)
from repositories.contact_repository import ContactRepository
from repositories.visitor_repository import VisitorRepository

RECENT_CONTACTS = 10
VISITOR_STAT_DAYS = 30


class AnalyticsService:
    """Aggregates visitor and contact figures."""

    @staticmethod
    def get_dashboard(db: Session) -> AnalyticsResponse:
        """
        Totals, the latest contacts, new visitors per day (most recent 30
        days that have any) and contact counts per status.
        """
        contact_repo = ContactRepository(db)
        visitor_repo = VisitorRepository(db)

        return AnalyticsResponse(
            total_visitors=visitor_repo.count(),
            total_contacts=contact_repo.count(),
            recent_contacts=[
                ContactSummary.model_validate(c)
                for c in contact_repo.recent(RECENT_CONTACTS)
            ],
            visitor_stats=[
                DailyCount(**row) for row in visitor_repo.daily_counts(VISITOR_STAT_DAYS)
            ],
            contact_stats=[
                StatusCount(status=status, count=count)
                for status, count in contact_repo.count_by_status().items()
            ],
        )
