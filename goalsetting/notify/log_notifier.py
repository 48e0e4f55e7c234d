"""Notifier that writes digests to the log instead of sending them."""

import logging
from typing import List

from goalsetting.db.models import Task
from goalsetting.notify.formatters import format_digest
from goalsetting.utils.constants import DEFAULT_APP_URL, DEFAULT_TIMEZONE
from goalsetting.utils.time_utils import today_in

logger = logging.getLogger(__name__)


class LogNotifier:
    """Development notifier; every digest is logged and reported as sent."""

    def __init__(self, app_url: str = DEFAULT_APP_URL, timezone: str = DEFAULT_TIMEZONE):
        self.app_url = app_url
        self.timezone = timezone

    async def send_digest(
        self, email: str, name: str, tasks: List[Task], is_morning: bool
    ) -> bool:
        digest = format_digest(
            name, tasks, is_morning, today_in(self.timezone), self.app_url
        )
        logger.info(f"Digest for {email}: {digest.subject}\n{digest.text}")
        return True
