"""Time-of-day slots that fire at most once per calendar date."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from goalsetting.utils.constants import FIRING_WINDOW
from goalsetting.utils.time_utils import seconds_since_midnight


def is_within_window(
    current: time, target: time, window: timedelta = FIRING_WINDOW
) -> bool:
    """Check whether current lies strictly within +/- window of target.

    The comparison is on the time of day only and does not wrap around
    midnight.

    Examples (target 08:00:00):
        07:59:05 -> True
        08:00:55 -> True
        07:58:59 -> False
        08:01:05 -> False
    """
    diff = abs(seconds_since_midnight(current) - seconds_since_midnight(target))
    return diff < window.total_seconds()


@dataclass
class DailySlot:
    """A configured time of day plus the date it last fired.

    last_fired lives in memory only; a restart forgets it.
    """

    name: str
    at: time
    is_morning: bool
    last_fired: date | None = None

    def is_due(self, now: datetime) -> bool:
        """True if now falls in this slot's window and it hasn't fired today."""
        if self.last_fired == now.date():
            return False
        return is_within_window(now.time(), self.at)

    def mark_fired(self, on: date) -> None:
        self.last_fired = on
