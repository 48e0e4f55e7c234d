"""Recurring task reset - reopens completed recurring tasks."""

import asyncio
import logging
from datetime import date

from goalsetting.engine.ports import TaskStore
from goalsetting.engine.recurrence import advance_from_today
from goalsetting.engine.service import PeriodicService
from goalsetting.utils.constants import (
    DEFAULT_EXTERNAL_CALL_TIMEOUT,
    DEFAULT_RECURRING_INTERVAL,
    DEFAULT_TIMEZONE,
)
from goalsetting.utils.time_utils import today_in

logger = logging.getLogger(__name__)


class RecurringResetter(PeriodicService):
    """Every tick, marks completed recurring tasks incomplete again.

    Each reset task gets its completion counter bumped and, when it has a due
    date, a new one stepped forward from today.
    """

    name = "Recurring goal service"

    def __init__(
        self,
        store: TaskStore,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        interval: float = DEFAULT_RECURRING_INTERVAL,
        call_timeout: float = DEFAULT_EXTERNAL_CALL_TIMEOUT,
        stop_event: asyncio.Event | None = None,
    ):
        super().__init__(interval, stop_event)
        self.store = store
        self.timezone = timezone
        self.call_timeout = call_timeout

    async def tick(self) -> None:
        await self.reset_recurring()

    async def reset_recurring(self, today: date | None = None) -> int:
        """Reset every completed recurring task.

        One failed update is logged and skipped; the rest of the batch still
        runs.

        Returns:
            Number of tasks reset
        """
        if today is None:
            today = today_in(self.timezone)

        try:
            completed = await asyncio.wait_for(
                self.store.query_completed(), timeout=self.call_timeout
            )
        except Exception as e:
            logger.error(f"Failed to fetch completed tasks: {e}")
            return 0

        recurring = [task for task in completed if task.recurrence != "none"]
        logger.info(f"Found {len(recurring)} completed recurring goals to check")

        reset_count = 0
        for task in recurring:
            try:
                task.is_completed = False
                task.completion_count += 1
                if task.due_date is not None:
                    task.due_date = advance_from_today(task.recurrence, today)

                await asyncio.wait_for(
                    self.store.update_task(task), timeout=self.call_timeout
                )

                reset_count += 1
                logger.info(
                    f"Reset recurring goal: {task.title} (Recurrence: {task.recurrence})"
                )

            except Exception as e:
                logger.error(f"Failed to reset recurring goal {task.id}: {e}")
                continue

        if reset_count > 0:
            logger.info(f"Successfully reset {reset_count} recurring goals")

        return reset_count
