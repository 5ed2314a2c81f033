"""
Analytics Router - admin-only dashboard figures.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

import authentication.auth as auth
from helpers.rate_limiter import general_limit
from models.schemas import AnalyticsResponse, TokenIdentity
from repositories.database import get_db
from services.analytics_service import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get(
    "",
    response_model=AnalyticsResponse,
    summary="Get dashboard analytics",
    description="Visitor and contact totals, the 10 latest contacts, new visitors per day and contacts per status.",
)
@general_limit
def get_analytics(
    request: Request,
    db: Session = Depends(get_db),
    current_admin: TokenIdentity = Depends(auth.get_current_admin),
) -> AnalyticsResponse:
    """
    Get analytics for the admin dashboard.

    Domain exceptions are caught by centralized exception handlers.
    """
    return AnalyticsService.get_dashboard(db)
