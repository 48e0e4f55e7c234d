"""Tests for loop lifecycle and shared shutdown."""

import asyncio

import pytest

from goalsetting.engine.contact_cache import ContactCache
from goalsetting.engine.recurring_reset import RecurringResetter
from goalsetting.engine.reminder_dispatch import ReminderDispatcher
from goalsetting.engine.runner import ReminderEngine
from goalsetting.engine.service import PeriodicService


class CountingService(PeriodicService):
    name = "Counting service"

    def __init__(self, interval: float, fail_first: bool = False):
        super().__init__(interval)
        self.ticks = 0
        self.fail_first = fail_first

    async def tick(self) -> None:
        self.ticks += 1
        if self.fail_first and self.ticks == 1:
            raise RuntimeError("boom")


class SlowService(PeriodicService):
    name = "Slow service"

    def __init__(self):
        super().__init__(interval=60)
        self.started = asyncio.Event()
        self.finished = False

    async def tick(self) -> None:
        self.started.set()
        await asyncio.sleep(0.05)
        self.finished = True


@pytest.mark.asyncio
async def test_service_ticks_until_stopped():
    service = CountingService(interval=0.01)
    service.start()
    await asyncio.sleep(0.05)
    await service.stop()

    assert service.ticks >= 2
    ticks = service.ticks
    await asyncio.sleep(0.03)
    assert service.ticks == ticks


@pytest.mark.asyncio
async def test_tick_error_does_not_end_loop():
    service = CountingService(interval=0.01, fail_first=True)
    service.start()
    await asyncio.sleep(0.05)
    await service.stop()

    assert service.ticks >= 2


@pytest.mark.asyncio
async def test_stop_lets_current_tick_finish():
    service = SlowService()
    service.start()
    await service.started.wait()
    await service.stop()

    assert service.finished is True


@pytest.mark.asyncio
async def test_start_twice_is_rejected():
    service = CountingService(interval=10)
    service.start()
    with pytest.raises(RuntimeError):
        service.start()
    await service.stop()


@pytest.mark.asyncio
async def test_engine_stops_both_loops(make_store, make_resolver, notifier):
    store = make_store([])
    dispatcher = ReminderDispatcher(store, make_resolver(), notifier, ContactCache(), interval=10)
    resetter = RecurringResetter(store, interval=10)
    engine = ReminderEngine(dispatcher, resetter)

    assert dispatcher.stop_event is engine.stop_event
    assert resetter.stop_event is engine.stop_event

    engine.start()
    await asyncio.sleep(0.01)
    await asyncio.wait_for(engine.stop(), timeout=1)

    assert engine.stop_event.is_set()
