"""
Contact notifications.

Builds the operator alert and the sender acknowledgment for a stored contact
submission and hands both to the injected mail transport, admin alert first.
"""

import html
from dataclasses import dataclass
from typing import Dict

from fastapi import Depends
from loguru import logger

import repositories.db_models as db_models
from models.config import settings
from models.exceptions import EmailDeliveryException
from services.email_service import EmailProvider, get_email_provider


@dataclass
class EmailMessage:
    to_email: str
    subject: str
    html_body: str
    text_body: str


class ContactNotifier:
    """Sends the two emails that follow a contact form submission."""

    def __init__(
        self,
        provider: EmailProvider,
        recipient: str,
        site_owner: str,
        social_links: Dict[str, str] | None = None,
    ) -> None:
        self.provider = provider
        self.recipient = recipient
        self.site_owner = site_owner
        self.social_links = social_links or {}

    def build_admin_alert(self, submission: db_models.ContactSubmission) -> EmailMessage:
        """Alert for the site operator with every captured detail.

        All user-provided data is HTML-escaped in the HTML body.
        """
        received = submission.created_at.strftime("%Y-%m-%d %H:%M:%S UTC")
        ip_address = submission.ip_address or "unknown"
        user_agent = submission.user_agent or "unknown"

        text_body = f"""New contact form submission

From: {submission.name}
Email: {submission.email}
Subject: {submission.subject}

Message:
{submission.message}

---
IP address: {ip_address}
User agent: {user_agent}
Received: {received}
"""

        safe = {
            key: html.escape(str(value))
            for key, value in {
                "name": submission.name,
                "email": submission.email,
                "subject": submission.subject,
                "message": submission.message,
                "ip": ip_address,
                "ua": user_agent,
            }.items()
        }

        html_body = f"""<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body style="font-family: sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="color: #333; border-bottom: 2px solid #4F46E5; padding-bottom: 10px;">
        New Contact Form Submission
    </h2>
    <table style="width: 100%; border-collapse: collapse; margin: 20px 0;">
        <tr><td style="padding: 6px 0; color: #666; width: 100px;"><strong>From:</strong></td><td>{safe["name"]}</td></tr>
        <tr><td style="padding: 6px 0; color: #666;"><strong>Email:</strong></td><td><a href="mailto:{safe["email"]}">{safe["email"]}</a></td></tr>
        <tr><td style="padding: 6px 0; color: #666;"><strong>Subject:</strong></td><td>{safe["subject"]}</td></tr>
    </table>
    <div style="background: #f8f9fa; padding: 20px; border-radius: 6px;">
        <h3 style="margin-top: 0;">Message:</h3>
        <p style="white-space: pre-wrap;">{safe["message"]}</p>
    </div>
    <p style="color: #888; font-size: 12px; margin-top: 30px;">
        IP address: {safe["ip"]}<br>
        User agent: {safe["ua"]}<br>
        Received: {received}
    </p>
</body>
</html>"""

        return EmailMessage(
            to_email=self.recipient,
            subject=f"Portfolio Contact: {submission.subject}",
            html_body=html_body,
            text_body=text_body,
        )

    def build_acknowledgment(
        self, submission: db_models.ContactSubmission
    ) -> EmailMessage:
        """Confirmation for the person who submitted the form."""
        owner = self.site_owner
        links_text = "\n".join(
            f"- {label}: {url}" for label, url in self.social_links.items()
        )
        links_html = "".join(
            f'<li><a href="{html.escape(url)}">{html.escape(label)}</a></li>'
            for label, url in self.social_links.items()
        )

        text_body = f"""Hello {submission.name},

Thank you for reaching out. I have received your message about "{submission.subject}" and will get back to you as soon as possible.
"""
        if links_text:
            text_body += f"\nIn the meantime, you can find me here:\n{links_text}\n"
        text_body += f"""
Your message:
{submission.message}

Best regards,
{owner}
"""

        links_section = (
            f"<p>In the meantime, you can find me here:</p><ul>{links_html}</ul>"
            if links_html
            else ""
        )
        html_body = f"""<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"></head>
<body style="font-family: sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
    <h2 style="color: #333;">Thank you for your message!</h2>
    <p>Hello {html.escape(submission.name)},</p>
    <p>I have received your message about <strong>{html.escape(submission.subject)}</strong> and will get back to you as soon as possible.</p>
    {links_section}
    <div style="background: #f8f9fa; padding: 15px; border-radius: 6px; margin: 20px 0;">
        <p style="margin: 0; white-space: pre-wrap;">{html.escape(submission.message)}</p>
    </div>
    <p style="color: #888; font-size: 14px;">Best regards,<br>{html.escape(owner)}</p>
</body>
</html>"""

        return EmailMessage(
            to_email=submission.email,
            subject=f"Thank you for contacting {owner}",
            html_body=html_body,
            text_body=text_body,
        )

    async def _deliver(self, message: EmailMessage) -> None:
        try:
            sent = await self.provider.send(
                message.to_email, message.subject, message.html_body, message.text_body
            )
        except Exception as e:
            logger.error(f"Mail transport raised while sending to {message.to_email}: {e!r}")
            raise EmailDeliveryException(message.to_email) from e

        if not sent:
            logger.error(f"Mail transport rejected message to {message.to_email}")
            raise EmailDeliveryException(message.to_email)

    async def dispatch(self, submission: db_models.ContactSubmission) -> None:
        """
        Send the admin alert, then the acknowledgment.

        Raises:
            EmailDeliveryException: If either send fails; the acknowledgment
                is not attempted when the admin alert fails
        """
        await self._deliver(self.build_admin_alert(submission))
        logger.info(f"Contact alert sent to {self.recipient} for submission {submission.id}")

        await self._deliver(self.build_acknowledgment(submission))
        logger.info(f"Contact acknowledgment sent for submission {submission.id}")


def get_contact_notifier(
    provider: EmailProvider = Depends(get_email_provider),
) -> ContactNotifier:
    """Build the notifier from settings (FastAPI dependency)."""
    return ContactNotifier(
        provider=provider,
        recipient=settings.CONTACT_RECIPIENT_EMAIL,
        site_owner=settings.SITE_OWNER_NAME,
        social_links=settings.social_links,
    )
