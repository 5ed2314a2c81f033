"""
Visitor repository for database operations.

A visitor is identified by network address only. Each tracked request adds
one VisitEvent row; the visitor row itself is only touched by a single
UPDATE so concurrent hits from one address never overwrite each other.
"""

from datetime import datetime, timezone

from sqlalchemy import func, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.exceptions import StorageException
from .base import BaseRepository


class VisitorRepository(BaseRepository[db_models.Visitor]):
    """Repository for Visitor and VisitEvent database operations."""

    def __init__(self, db: Session):
        super().__init__(db_models.Visitor, db)

    def get_by_ip(self, ip_address: str) -> db_models.Visitor | None:
        """
        Get visitor by network address.

        Args:
            ip_address: Client address

        Returns:
            Visitor if found, None otherwise
        """
        return (
            self.db.query(db_models.Visitor)
            .filter(db_models.Visitor.ip_address == ip_address)
            .first()
        )

    def record_visit(
        self,
        ip_address: str,
        page: str,
        user_agent: str | None = None,
        referrer: str | None = None,
        browser: str | None = None,
        device: str | None = None,
    ) -> db_models.Visitor:
        """
        Upsert the visitor for `ip_address` and append one visit event.

        A first visit creates the visitor with a single event. Later visits
        flag the visitor as returning, move last_visit forward and insert
        another event. If another request creates the visitor between our
        lookup and insert, the unique constraint on ip_address fires and we
        take the returning-visitor path instead.

        Returns:
            The visitor row (refreshed)

        Raises:
            StorageException: If the write fails
        """
        now = datetime.now(timezone.utc)

        visitor_id = self._find_id(ip_address)
        if visitor_id is None:
            visitor = db_models.Visitor(
                ip_address=ip_address,
                user_agent=user_agent,
                referrer=referrer,
                browser=browser,
                device=device,
                created_at=now,
                last_visit=now,
                visits=[db_models.VisitEvent(page=page, timestamp=now)],
            )
            self.db.add(visitor)
            try:
                self.commit()
                self.db.refresh(visitor)
                return visitor
            except IntegrityError:
                # Lost the insert race; the row exists now
                visitor_id = self._find_id(ip_address)
                if visitor_id is None:
                    raise

        return self._append_visit(visitor_id, page, now)

    def _find_id(self, ip_address: str) -> int | None:
        row = (
            self.db.query(db_models.Visitor.id)
            .filter(db_models.Visitor.ip_address == ip_address)
            .first()
        )
        return row.id if row else None

    def _append_visit(
        self, visitor_id: int, page: str, now: datetime
    ) -> db_models.Visitor:
        self.db.execute(
            update(db_models.Visitor)
            .where(db_models.Visitor.id == visitor_id)
            .values(is_returning_visitor=True, last_visit=now)
            .execution_options(synchronize_session=False)
        )
        self.db.add(
            db_models.VisitEvent(visitor_id=visitor_id, page=page, timestamp=now)
        )
        self.commit()

        visitor = self.get_by_id(visitor_id)
        if visitor is None:
            raise StorageException(f"Visitor {visitor_id} vanished while recording a visit")
        self.db.refresh(visitor)
        return visitor

    def count_visits(self, visitor_id: int) -> int:
        """Number of visit events recorded for a visitor."""
        return (
            self.db.query(func.count(db_models.VisitEvent.id))
            .filter(db_models.VisitEvent.visitor_id == visitor_id)
            .scalar()
            or 0
        )

    def daily_counts(self, days: int = 30) -> list[dict[str, int | str]]:
        """
        New visitors per calendar day, most recent day first.

        Args:
            days: Maximum number of day buckets to return

        Returns:
            List of {"date": "YYYY-MM-DD", "count": n}
        """
        day = func.date(db_models.Visitor.created_at).label("day")
        rows = (
            self.db.query(day, func.count(db_models.Visitor.id).label("count"))
            .group_by(day)
            .order_by(day.desc())
            .limit(days)
            .all()
        )
        return [{"date": str(row.day), "count": row.count} for row in rows]
