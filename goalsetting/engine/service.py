"""Fixed-interval background loop with cooperative shutdown."""

import asyncio
import logging

logger = logging.getLogger(__name__)


class PeriodicService:
    """Runs tick() every interval seconds until the stop event is set.

    A tick that raises is logged and the loop carries on with the next one.
    Stopping never interrupts a tick in progress; the event is only checked
    between ticks.
    """

    name = "Periodic service"

    def __init__(self, interval: float, stop_event: asyncio.Event | None = None):
        self.interval = interval
        self.stop_event = stop_event if stop_event is not None else asyncio.Event()
        self._task: asyncio.Task | None = None

    async def tick(self) -> None:
        raise NotImplementedError

    async def run(self) -> None:
        """Loop until the stop event is set."""
        logger.info(f"{self.name} started (interval: {self.interval}s)")

        while not self.stop_event.is_set():
            try:
                await self.tick()
            except Exception:
                logger.exception(f"{self.name}: error during tick")

            try:
                await asyncio.wait_for(self.stop_event.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

        logger.info(f"{self.name} stopped")

    def start(self) -> asyncio.Task:
        """Schedule run() on the running event loop."""
        if self._task is not None and not self._task.done():
            raise RuntimeError(f"{self.name} is already running")
        self._task = asyncio.create_task(self.run(), name=self.name)
        return self._task

    async def wait(self) -> None:
        """Wait for the loop to exit."""
        if self._task is not None:
            await self._task

    async def stop(self) -> None:
        """Signal the loop to exit after its current tick and wait for it."""
        self.stop_event.set()
        await self.wait()
