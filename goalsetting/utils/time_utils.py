"""Time and timezone utilities."""

from datetime import date, datetime, time
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def is_known_timezone(tz: str) -> bool:
    """Check that tz names a zone the tz database knows."""
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def now_in(tz: str) -> datetime:
    """Current time in the given timezone."""
    return datetime.now(ZoneInfo(tz))


def today_in(tz: str) -> date:
    """Current calendar date in the given timezone."""
    return now_in(tz).date()


def parse_time_of_day(value: str | None, default: time) -> time:
    """Parse an HH:MM[:SS] string, falling back to default.

    Empty or malformed values never raise; the default is returned instead.

    Examples:
        "07:30:00" -> 07:30:00
        "21:15" -> 21:15:00
        "half past eight" -> default
    """
    if not value:
        return default

    try:
        parsed = time.fromisoformat(value.strip())
    except ValueError:
        return default

    # Reminder slots are wall-clock times, not zone-aware ones
    return parsed.replace(tzinfo=None, microsecond=0)


def seconds_since_midnight(t: time) -> float:
    """Seconds, including fractions, between midnight and t."""
    return t.hour * 3600 + t.minute * 60 + t.second + t.microsecond / 1_000_000


def format_due_date(due: date | None) -> str:
    """Format a due date for digests."""
    if due is None:
        return "No due date"
    return due.strftime("%b %d, %Y")


def format_relative_due(due: date, today: date) -> str:
    """Format a due date relative to today.

    Examples:
        "due today"
        "due tomorrow"
        "due in 5 days"
        "2 days overdue"
    """
    days = (due - today).days

    if days < 0:
        overdue = abs(days)
        return f"{overdue} day{'s' if overdue != 1 else ''} overdue"
    if days == 0:
        return "due today"
    if days == 1:
        return "due tomorrow"
    return f"due in {days} days"
