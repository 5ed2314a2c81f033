"""Email transports for outbound mail.

This module provides a unified async interface for sending email through
various providers:
- console: Logs emails (development)
- smtp: Standard SMTP delivery, run in a worker thread
- sendgrid: SendGrid v3 REST API over httpx

Every transport reports the outcome as a bool; nothing is retried.
"""

import asyncio
import re
import smtplib
from abc import ABC, abstractmethod
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import httpx
from loguru import logger

from models.config import settings

SENDGRID_SEND_URL = "https://api.sendgrid.com/v3/mail/send"


class EmailProvider(ABC):
    """Abstract base class for email providers."""

    @abstractmethod
    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> bool:
        """Send an email. Returns True when the transport accepted it."""


class ConsoleProvider(EmailProvider):
    """Console email provider for development/testing."""

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> bool:
        clean_html = re.sub(r"<[^>]+>", "", html_body)[:500]
        logger.info(
            f"\n{'=' * 60}\n"
            f"EMAIL (console provider)\n"
            f"To: {to_email}\n"
            f"Subject: {subject}\n"
            f"{'-' * 60}\n"
            f"{text_body}\n"
            f"{'-' * 60}\n"
            f"HTML (preview):\n{clean_html}\n"
            f"{'=' * 60}"
        )
        return True


class SMTPProvider(EmailProvider):
    """SMTP email provider.

    Supports implicit SSL (port 465, SMTP_USE_SSL) and STARTTLS (port 587,
    SMTP_USE_TLS). smtplib blocks, so each send runs in a worker thread.
    """

    def __init__(self) -> None:
        self.host = settings.SMTP_HOST
        self.port = settings.SMTP_PORT
        self.user = settings.SMTP_USER
        self.password = settings.SMTP_PASSWORD
        self.from_email = settings.SMTP_FROM_EMAIL
        self.from_name = settings.SMTP_FROM_NAME
        self.use_tls = settings.SMTP_USE_TLS
        self.use_ssl = settings.SMTP_USE_SSL
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS

    def build_message(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = f"{self.from_name} <{self.from_email}>"
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain", "utf-8"))
        msg.attach(MIMEText(html_body, "html", "utf-8"))
        return msg

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        if self.use_tls:
            server.starttls()
        return server

    def _send_blocking(self, to_email: str, msg: MIMEMultipart) -> None:
        server = self._connect()
        try:
            if self.user and self.password:
                server.login(self.user, self.password)
            server.sendmail(self.from_email, to_email, msg.as_string())
        finally:
            server.quit()

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> bool:
        msg = self.build_message(to_email, subject, html_body, text_body)
        try:
            await asyncio.to_thread(self._send_blocking, to_email, msg)
        except smtplib.SMTPRecipientsRefused as e:
            logger.error(f"SMTP: Recipients refused - {e.recipients}")
            return False
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"SMTP: Authentication failed - {e.smtp_code}: {e.smtp_error}")
            return False
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"SMTP: Failed to send email to {to_email}: {e}")
            return False

        logger.info(f"Email sent to {to_email} via SMTP")
        return True


class SendGridProvider(EmailProvider):
    """SendGrid email provider using the v3 REST API."""

    def __init__(self, client: httpx.AsyncClient | None = None) -> None:
        self.api_key = settings.SENDGRID_API_KEY
        self.from_email = settings.SMTP_FROM_EMAIL
        self.from_name = settings.SMTP_FROM_NAME
        self.timeout = settings.EMAIL_TIMEOUT_SECONDS
        self._client = client

    def build_payload(
        self, to_email: str, subject: str, html_body: str, text_body: str
    ) -> dict:
        return {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email, "name": self.from_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text_body},
                {"type": "text/html", "value": html_body},
            ],
        }

    async def _post(self, client: httpx.AsyncClient, payload: dict) -> httpx.Response:
        return await client.post(
            SENDGRID_SEND_URL,
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    async def send(
        self,
        to_email: str,
        subject: str,
        html_body: str,
        text_body: str,
    ) -> bool:
        if not self.api_key:
            logger.error("SendGrid: SENDGRID_API_KEY is not set")
            return False

        payload = self.build_payload(to_email, subject, html_body, text_body)
        try:
            if self._client is not None:
                response = await self._post(self._client, payload)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await self._post(client, payload)
        except httpx.TimeoutException:
            logger.error(f"SendGrid: timeout sending to {to_email}")
            return False
        except httpx.HTTPError as e:
            logger.error(f"SendGrid: transport error sending to {to_email}: {e}")
            return False

        if response.status_code in (200, 202):
            logger.info(f"Email sent to {to_email} via SendGrid")
            return True

        logger.error(
            f"SendGrid returned status {response.status_code} for {to_email}: "
            f"{response.text[:200]}"
        )
        return False


def get_email_provider() -> EmailProvider:
    """Get the configured email provider (FastAPI dependency)."""
    provider_name = settings.EMAIL_PROVIDER.lower()

    if provider_name == "smtp":
        return SMTPProvider()
    elif provider_name == "sendgrid":
        return SendGridProvider()
    elif provider_name == "console":
        return ConsoleProvider()
    else:
        logger.warning(f"Unknown email provider '{provider_name}', using console")
        return ConsoleProvider()
