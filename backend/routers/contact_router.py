"""Contact form router for visitor inquiries."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from helpers.rate_limiter import contact_limit, general_limit
from helpers.request_utils import get_client_ip, get_user_agent
from models.schemas import ContactFormRequest, ContactFormResponse
from repositories.database import get_db
from services.contact_service import SUCCESS_MESSAGE, ContactService
from services.notification_service import ContactNotifier, get_contact_notifier
from services.visitor_service import VisitorTracker, get_visitor_tracker

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactFormResponse)
@general_limit
@contact_limit
async def submit_contact_form(
    request: Request,
    form: ContactFormRequest,
    db: Session = Depends(get_db),
    notifier: ContactNotifier = Depends(get_contact_notifier),
    tracker: VisitorTracker = Depends(get_visitor_tracker),
) -> ContactFormResponse:
    """Submit a contact form.

    Stores the submission, then emails the site owner and sends the sender
    an acknowledgment. Public endpoint, limited per address.

    Raises:
        ValidationException: 400 if a field is missing or the email is malformed
        EmailDeliveryException: 500 if either email fails (the submission stays stored)
    """
    await run_in_threadpool(tracker.track_request, request)

    await ContactService.submit(
        db,
        notifier,
        form,
        ip_address=get_client_ip(request),
        user_agent=get_user_agent(request),
    )
    return ContactFormResponse(message=SUCCESS_MESSAGE)
