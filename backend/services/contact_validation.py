"""
Contact form validation.

Checks required fields and email shape before anything is stored or sent.
"""

import re

from models.exceptions import ValidationException
from models.schemas import ContactFormRequest, ValidatedContact

REQUIRED_FIELDS_MESSAGE = "All fields are required"
INVALID_EMAIL_MESSAGE = "Invalid email format"


class ContactValidator:
    """Validator for inbound contact form submissions."""

    # Something@something.something with no whitespace and a single "@"
    EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

    @classmethod
    def is_valid_email(cls, email: str) -> bool:
        return bool(cls.EMAIL_PATTERN.match(email))

    @classmethod
    def validate(cls, form: ContactFormRequest) -> ValidatedContact:
        """
        Validate and normalize a contact form.

        Args:
            form: Raw form body

        Returns:
            ValidatedContact with trimmed strings and lower-cased email

        Raises:
            ValidationException: If a field is missing or blank, or the email
                is malformed
        """
        values = {
            field: (getattr(form, field) or "").strip()
            for field in ("name", "email", "subject", "message")
        }
        if not all(values.values()):
            raise ValidationException(REQUIRED_FIELDS_MESSAGE)

        if not cls.is_valid_email(values["email"]):
            raise ValidationException(INVALID_EMAIL_MESSAGE)

        values["email"] = values["email"].lower()
        return ValidatedContact(**values)
