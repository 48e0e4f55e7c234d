"""SMTP delivery of reminder digests."""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from datetime import date
from email.message import EmailMessage
from email.utils import formataddr
from typing import List

from goalsetting.db.models import Task
from goalsetting.notify.formatters import format_digest
from goalsetting.utils.constants import DEFAULT_APP_URL, DEFAULT_TIMEZONE
from goalsetting.utils.time_utils import today_in

logger = logging.getLogger(__name__)


@dataclass
class SmtpSettings:
    """Outgoing mail server settings."""

    host: str
    port: int
    user: str
    password: str
    from_email: str
    from_name: str
    timeout: float = 30.0


class EmailNotifier:
    """Sends one HTML + plain-text digest per call over SMTP with STARTTLS."""

    def __init__(
        self,
        settings: SmtpSettings,
        app_url: str = DEFAULT_APP_URL,
        timezone: str = DEFAULT_TIMEZONE,
    ):
        self.settings = settings
        self.app_url = app_url
        self.timezone = timezone

    def build_message(
        self,
        email: str,
        name: str,
        tasks: List[Task],
        is_morning: bool,
        today: date | None = None,
    ) -> EmailMessage:
        """Compose the digest email."""
        if today is None:
            today = today_in(self.timezone)

        digest = format_digest(name, tasks, is_morning, today, self.app_url)

        message = EmailMessage()
        message["Subject"] = digest.subject
        message["From"] = formataddr((self.settings.from_name, self.settings.from_email))
        message["To"] = formataddr((name, email))
        message.set_content(digest.text)
        message.add_alternative(digest.html, subtype="html")
        return message

    async def send_digest(
        self, email: str, name: str, tasks: List[Task], is_morning: bool
    ) -> bool:
        """Send a digest; returns False instead of raising on SMTP errors."""
        if not tasks:
            logger.info(f"No pending tasks for {email}, skipping daily reminder")
            return True

        message = self.build_message(email, name, tasks, is_morning)

        try:
            await asyncio.to_thread(self._send, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send daily reminder email to {email}: {e}")
            return False

        logger.info(f"Daily reminder email sent to {email}")
        return True

    def _send(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.settings.host, self.settings.port, timeout=self.settings.timeout
        ) as server:
            server.starttls()
            if self.settings.user and self.settings.password:
                server.login(self.settings.user, self.settings.password)
            server.send_message(message)
