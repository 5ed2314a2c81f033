"""
Admin router: login and contact inbox management.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import PageNumber, PageSize, total_pages
from helpers.rate_limiter import general_limit
from repositories.database import get_db
from services.auth_service import AuthService
from services.contact_service import ContactService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/login", response_model=schemas.AdminLoginResponse)
@general_limit
def login(
    request: Request,
    credentials: schemas.AdminLoginRequest,
    db: Session = Depends(get_db),
) -> schemas.AdminLoginResponse:
    """
    Exchange admin credentials for a bearer token.

    Raises:
        InvalidCredentialsException: 401 on unknown username or wrong password
    """
    return AuthService.login(db, credentials.username, credentials.password)


@router.get("/contacts", response_model=schemas.ContactListResponse)
@general_limit
def list_contacts(
    request: Request,
    status: Optional[db_models.ContactStatus] = None,
    page: PageNumber = 1,
    limit: PageSize = 10,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.ContactListResponse:
    """List contact submissions newest first, optionally filtered by status."""
    contacts, total = ContactService.list_submissions(db, status, page, limit)
    return schemas.ContactListResponse(
        contacts=[schemas.ContactSubmission.model_validate(c) for c in contacts],
        total_pages=total_pages(total, limit),
        current_page=page,
        total_contacts=total,
    )


@router.patch("/contacts/{contact_id}", response_model=schemas.ContactStatusUpdateResponse)
@general_limit
def update_contact_status(
    request: Request,
    contact_id: int,
    update: schemas.ContactStatusUpdate,
    db: Session = Depends(get_db),
    current_admin: schemas.TokenIdentity = Depends(auth.get_current_admin),
) -> schemas.ContactStatusUpdateResponse:
    """
    Set a submission's status.

    Raises:
        ContactNotFoundException: 404 if the submission does not exist
    """
    contact = ContactService.update_status(db, contact_id, update.status)
    return schemas.ContactStatusUpdateResponse(
        message="Contact status updated",
        contact=schemas.ContactSubmission.model_validate(contact),
    )
