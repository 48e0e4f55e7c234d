"""Reminder dispatch - sends morning and evening digests of pending tasks."""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime, time
from typing import Dict, List

from goalsetting.db.models import Contact, Task
from goalsetting.engine.contact_cache import ContactCache
from goalsetting.engine.ports import Notifier, Resolver, TaskStore
from goalsetting.engine.schedule import DailySlot
from goalsetting.engine.service import PeriodicService
from goalsetting.utils.constants import (
    DEFAULT_DISPLAY_NAME,
    DEFAULT_EVENING_TIME,
    DEFAULT_EXTERNAL_CALL_TIMEOUT,
    DEFAULT_MORNING_TIME,
    DEFAULT_REMINDER_INTERVAL,
    DEFAULT_TIMEZONE,
)
from goalsetting.utils.time_utils import now_in

logger = logging.getLogger(__name__)


def group_by_user(tasks: List[Task]) -> Dict[str, List[Task]]:
    """Partition tasks by owner, keeping each owner's tasks in store order."""
    grouped: Dict[str, List[Task]] = defaultdict(list)
    for task in tasks:
        grouped[task.user_id].append(task)
    return dict(grouped)


class ReminderDispatcher(PeriodicService):
    """Checks the clock every tick and sends digests in the configured slots.

    Each slot (morning, evening) fires at most once per calendar date. The
    slot is marked as fired once the dispatch attempt finishes, whether or
    not it succeeded.
    """

    name = "Task reminder service"

    def __init__(
        self,
        store: TaskStore,
        resolver: Resolver,
        notifier: Notifier,
        cache: ContactCache,
        *,
        morning_time: time = DEFAULT_MORNING_TIME,
        evening_time: time = DEFAULT_EVENING_TIME,
        timezone: str = DEFAULT_TIMEZONE,
        interval: float = DEFAULT_REMINDER_INTERVAL,
        call_timeout: float = DEFAULT_EXTERNAL_CALL_TIMEOUT,
        stop_event: asyncio.Event | None = None,
    ):
        super().__init__(interval, stop_event)
        self.store = store
        self.resolver = resolver
        self.notifier = notifier
        self.cache = cache
        self.timezone = timezone
        self.call_timeout = call_timeout
        self.slots = [
            DailySlot("morning", morning_time, is_morning=True),
            DailySlot("evening", evening_time, is_morning=False),
        ]

        logger.info(
            f"Configured reminder times - Morning: {morning_time}, Evening: {evening_time}"
        )

    async def tick(self, now: datetime | None = None) -> None:
        """Fire whichever slots are due at now."""
        if now is None:
            now = now_in(self.timezone)

        self.cache.evict_expired()

        for slot in self.slots:
            if not slot.is_due(now):
                continue

            logger.info(f"Sending {slot.name} reminders at {now.time():%H:%M:%S}")
            try:
                await self.dispatch(is_morning=slot.is_morning)
            finally:
                slot.mark_fired(now.date())

    async def dispatch(self, is_morning: bool) -> int:
        """Send one digest per user with pending tasks.

        Returns:
            Number of users whose digest was sent successfully
        """
        try:
            tasks = await asyncio.wait_for(
                self.store.query_incomplete(), timeout=self.call_timeout
            )
        except Exception as e:
            logger.error(f"Failed to fetch pending tasks: {e}")
            return 0

        by_user = group_by_user(tasks)
        if not by_user:
            logger.info("No pending tasks, nothing to send")
            return 0

        results = await asyncio.gather(
            *(
                self._notify_user(user_id, user_tasks, is_morning)
                for user_id, user_tasks in by_user.items()
            )
        )
        sent = sum(1 for ok in results if ok)

        logger.info(
            f"{'Morning' if is_morning else 'Evening'} reminders sent to "
            f"{sent}/{len(by_user)} users"
        )
        return sent

    async def _notify_user(
        self, user_id: str, tasks: List[Task], is_morning: bool
    ) -> bool:
        """Resolve one user's contact and send their digest; never raises."""
        if not tasks:
            return False

        try:
            contact = await self._lookup_contact(user_id)
        except Exception as e:
            logger.error(f"Failed to resolve contact for user {user_id}: {e}")
            return False

        if contact is None or not contact.is_usable:
            logger.warning(f"No email found for user {user_id}, skipping reminder")
            return False

        email = contact.email.strip()  # type: ignore
        name = contact.name or DEFAULT_DISPLAY_NAME

        try:
            ok = await asyncio.wait_for(
                self.notifier.send_digest(email, name, tasks, is_morning),
                timeout=self.call_timeout,
            )
        except Exception as e:
            logger.error(f"Failed to send reminder to {email}: {e}")
            return False

        if ok:
            logger.info(
                f"Sent {'morning' if is_morning else 'evening'} daily reminder "
                f"to {email} with {len(tasks)} tasks"
            )
        else:
            logger.error(f"Notifier reported failure sending reminder to {email}")
        return bool(ok)

    async def _lookup_contact(self, user_id: str) -> Contact | None:
        """Cache first, then the resolver; successful lookups are cached."""
        contact = self.cache.get(user_id)
        if contact is not None:
            return contact

        contact = await asyncio.wait_for(
            self.resolver.resolve(user_id), timeout=self.call_timeout
        )
        if contact is not None:
            self.cache.set(user_id, contact.email, contact.name)
        return contact
