"""
Contact repository for database operations.

Handles persistence and listing of contact form submissions.
"""

from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from .base import BaseRepository


class ContactRepository(BaseRepository[db_models.ContactSubmission]):
    """Repository for ContactSubmission entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize contact repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.ContactSubmission, db)

    def create_submission(
        self,
        name: str,
        email: str,
        subject: str,
        message: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> db_models.ContactSubmission:
        """
        Store a new submission with status `new`.

        Returns:
            Created ContactSubmission

        Raises:
            StorageException: If the write fails
        """
        submission = db_models.ContactSubmission(
            name=name,
            email=email,
            subject=subject,
            message=message,
            ip_address=ip_address,
            user_agent=user_agent,
            status=db_models.ContactStatus.NEW,
        )
        return self.create(submission)

    def list_submissions(
        self,
        status: db_models.ContactStatus | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[db_models.ContactSubmission], int]:
        """
        List submissions newest first.

        Args:
            status: Optional status filter
            page: 1-based page number
            limit: Page size

        Returns:
            Tuple of (submissions on the page, total matching submissions)
        """
        query = self.db.query(db_models.ContactSubmission)
        if status is not None:
            query = query.filter(db_models.ContactSubmission.status == status)
        query = query.order_by(
            db_models.ContactSubmission.created_at.desc(),
            db_models.ContactSubmission.id.desc(),
        )
        return self.paginate(query, page, limit)

    def update_status(
        self, contact_id: int, status: db_models.ContactStatus
    ) -> db_models.ContactSubmission | None:
        """
        Set a submission's status.

        Moving to `read` stamps read_at and moving to `replied` stamps
        replied_at; other timestamps are left untouched.

        Returns:
            Updated submission, or None if it does not exist
        """
        submission = self.get_by_id(contact_id)
        if submission is None:
            return None

        submission.status = status
        now = datetime.now(timezone.utc)
        if status == db_models.ContactStatus.READ:
            submission.read_at = now
        elif status == db_models.ContactStatus.REPLIED:
            submission.replied_at = now

        return self.update(submission)

    def recent(self, limit: int = 10) -> list[db_models.ContactSubmission]:
        """Most recent submissions."""
        return (
            self.db.query(db_models.ContactSubmission)
            .order_by(
                db_models.ContactSubmission.created_at.desc(),
                db_models.ContactSubmission.id.desc(),
            )
            .limit(limit)
            .all()
        )

    def count_by_status(self) -> dict[str, int]:
        """
        Count submissions per status.

        Returns:
            Dict mapping status value to count (statuses with no rows omitted)
        """
        rows = (
            self.db.query(
                db_models.ContactSubmission.status,
                func.count(db_models.ContactSubmission.id).label("count"),
            )
            .group_by(db_models.ContactSubmission.status)
            .all()
        )
        return {row.status.value: row.count for row in rows}
