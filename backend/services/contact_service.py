"""Contact form service for handling visitor inquiries.

The workflow is validate, persist, then notify. A submission is stored before
any email goes out, so a delivery failure still leaves exactly one record.
"""

from loguru import logger
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

import repositories.db_models as db_models
from models.exceptions import ContactNotFoundException
from models.schemas import ContactFormRequest, ValidatedContact
from repositories.contact_repository import ContactRepository
from services.contact_validation import ContactValidator
from services.notification_service import ContactNotifier

SUCCESS_MESSAGE = (
    "Message sent successfully! You will receive a confirmation email shortly."
)
DELIVERY_FAILED_MESSAGE = "Failed to send message. Please try again later."


class ContactService:
    """Service for contact submission business logic."""

    @staticmethod
    def store_submission(
        db: Session,
        contact: ValidatedContact,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> db_models.ContactSubmission:
        """
        Persist a validated submission with status `new`.

        Raises:
            StorageException: If the write fails
        """
        submission = ContactRepository(db).create_submission(
            name=contact.name,
            email=contact.email,
            subject=contact.subject,
            message=contact.message,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        logger.info(f"Contact submission {submission.id} stored: subject={contact.subject!r}")
        return submission

    @classmethod
    async def submit(
        cls,
        db: Session,
        notifier: ContactNotifier,
        form: ContactFormRequest,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> db_models.ContactSubmission:
        """
        Process a contact form submission.

        Args:
            db: Database session
            notifier: Sends the admin alert and acknowledgment
            form: Raw form body
            ip_address: Submitter's address
            user_agent: Submitter's user agent

        Returns:
            The stored submission

        Raises:
            ValidationException: If the form is incomplete or the email is malformed
            StorageException: If the submission cannot be stored
            EmailDeliveryException: If either email fails to send
        """
        contact = ContactValidator.validate(form)

        submission = await run_in_threadpool(
            cls.store_submission, db, contact, ip_address, user_agent
        )

        await notifier.dispatch(submission)
        return submission

    @staticmethod
    def list_submissions(
        db: Session,
        status: db_models.ContactStatus | None,
        page: int,
        limit: int,
    ) -> tuple[list[db_models.ContactSubmission], int]:
        """Paginated submissions, newest first, with the total match count."""
        return ContactRepository(db).list_submissions(status, page, limit)

    @staticmethod
    def update_status(
        db: Session, contact_id: int, status: db_models.ContactStatus
    ) -> db_models.ContactSubmission:
        """
        Set a submission's status.

        Raises:
            ContactNotFoundException: If the submission does not exist
        """
        submission = ContactRepository(db).update_status(contact_id, status)
        if submission is None:
            raise ContactNotFoundException()
        logger.info(f"Contact submission {contact_id} marked {status.value}")
        return submission
