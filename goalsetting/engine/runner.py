"""Starts and stops the reminder and recurring-reset loops together."""

import asyncio
import logging

from goalsetting.engine.recurring_reset import RecurringResetter
from goalsetting.engine.reminder_dispatch import ReminderDispatcher

logger = logging.getLogger(__name__)


class ReminderEngine:
    """Owns both background loops and the stop event they share."""

    def __init__(
        self,
        dispatcher: ReminderDispatcher,
        resetter: RecurringResetter,
        stop_event: asyncio.Event | None = None,
    ):
        self.stop_event = stop_event if stop_event is not None else asyncio.Event()
        self.dispatcher = dispatcher
        self.resetter = resetter
        # Both loops answer to the same signal
        self.dispatcher.stop_event = self.stop_event
        self.resetter.stop_event = self.stop_event

    def start(self) -> None:
        """Launch both loops on the running event loop."""
        self.dispatcher.start()
        self.resetter.start()
        logger.info("Reminder engine started")

    async def wait(self) -> None:
        """Block until both loops have exited."""
        await asyncio.gather(self.dispatcher.wait(), self.resetter.wait())

    async def stop(self) -> None:
        """Let both loops finish their current tick, then wait for them."""
        self.stop_event.set()
        await self.wait()
        logger.info("Reminder engine stopped")
