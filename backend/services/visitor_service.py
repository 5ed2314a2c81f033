"""
Visitor tracking.

Records one visit event per tracked request. Tracking is a side effect of
serving the request, so failures are logged and swallowed.
"""

from typing import Optional

from fastapi import Depends
from loguru import logger
from sqlalchemy.orm import Session
from starlette.requests import Request

from helpers.request_utils import get_client_ip, get_referrer, get_user_agent
from helpers.user_agent import parse_user_agent
from repositories.database import get_db
from repositories.visitor_repository import VisitorRepository


class VisitorTracker:
    """Upserts the visitor for a network address and appends a visit event."""

    def __init__(self, db: Session) -> None:
        self.repo = VisitorRepository(db)

    def track(
        self,
        ip_address: Optional[str],
        page: str,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None,
    ) -> None:
        """
        Record a visit. Never raises.

        Args:
            ip_address: Client address (requests without one are ignored)
            page: Request path
            user_agent: Raw User-Agent header
            referrer: Raw Referer header
        """
        if not ip_address:
            logger.debug(f"Visit to {page} has no client address, not tracked")
            return

        try:
            parsed = parse_user_agent(user_agent)
            self.repo.record_visit(
                ip_address=ip_address,
                page=page,
                user_agent=user_agent,
                referrer=referrer,
                browser=parsed["browser"],
                device=parsed["device"],
            )
        except Exception as e:
            self.repo.rollback()
            logger.warning(f"Visitor tracking failed for {page}: {e!r}")

    def track_request(self, request: Request) -> None:
        """Record a visit for the given request."""
        self.track(
            ip_address=get_client_ip(request),
            page=request.url.path,
            user_agent=get_user_agent(request),
            referrer=get_referrer(request),
        )


def get_visitor_tracker(db: Session = Depends(get_db)) -> VisitorTracker:
    """FastAPI dependency providing a tracker bound to the request session."""
    return VisitorTracker(db)
