"""
Email Service
Sends HTML email over SMTP. Delivery is awaited inline; the blocking
smtplib call runs in a worker thread.
"""

import asyncio
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from urllib.parse import urlencode

from app.config import Settings, settings
from app.exceptions import TransportError

logger = logging.getLogger(__name__)


class EmailService:
    def __init__(self, config: Settings):
        self.config = config

    async def send_email(self, to_email: str, subject: str, html_body: str) -> None:
        if not self.config.smtp_host:
            logger.warning(f"SMTP is not configured; email to {to_email} not sent. Subject: {subject}. Body: {html_body}")
            return

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.config.smtp_from
        msg["To"] = to_email
        msg.attach(MIMEText(html_body, "html"))

        try:
            await asyncio.to_thread(self._deliver, to_email, msg.as_string())
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            raise TransportError() from e
        logger.info(f"Email '{subject}' sent to {to_email}")

    def _deliver(self, to_email: str, message: str) -> None:
        smtp_cls = smtplib.SMTP_SSL if self.config.smtp_use_ssl else smtplib.SMTP
        with smtp_cls(self.config.smtp_host, self.config.smtp_port, timeout=self.config.smtp_timeout_seconds) as server:
            if not self.config.smtp_use_ssl:
                server.starttls()
            if self.config.smtp_username:
                server.login(self.config.smtp_username, self.config.smtp_password)
            server.sendmail(self.config.smtp_from, [to_email], message)

    async def send_confirmation_email(self, to_email: str, user_id: str, token: str) -> None:
        query = urlencode({"userId": user_id, "token": token})
        link = f"{self.config.public_base_url.rstrip('/')}{self.config.api_prefix}/auth/confirm-email?{query}"
        body = (
            "<p>Thanks for registering.</p>"
            f"<p>Please confirm your email by <a href='{html.escape(link, quote=True)}'>clicking here</a>.</p>"
        )
        await self.send_email(to_email, "Confirm your email", body)


def get_email_service() -> EmailService:
    """Dependency returning the configured email service."""
    return EmailService(settings)
