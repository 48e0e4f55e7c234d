"""Data models."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal


RecurrenceRule = Literal["none", "daily", "weekly", "monthly"]
Priority = Literal["low", "medium", "high"]

RECURRENCE_RULES: tuple[RecurrenceRule, ...] = ("none", "daily", "weekly", "monthly")
PRIORITIES: tuple[Priority, ...] = ("low", "medium", "high")


def parse_recurrence(value: str | None) -> RecurrenceRule:
    """Normalize a stored recurrence value; unknown values mean no recurrence."""
    text = (value or "").strip().lower()
    if text in RECURRENCE_RULES:
        return text  # type: ignore
    return "none"


def parse_priority(value: str | None) -> Priority:
    """Normalize a stored priority value, defaulting to medium."""
    text = (value or "").strip().lower()
    if text in PRIORITIES:
        return text  # type: ignore
    return "medium"


@dataclass
class Task:
    """A user goal as held by the task store."""

    user_id: str
    title: str
    description: str = ""
    due_date: date | None = None
    is_completed: bool = False
    recurrence: RecurrenceRule = "none"
    completion_count: int = 0
    category: str = ""
    priority: Priority = "medium"
    created_at: datetime | None = None
    id: int | None = None


@dataclass(frozen=True)
class Contact:
    """Resolved contact details for a task owner."""

    email: str | None
    name: str | None

    @property
    def is_usable(self) -> bool:
        """True when there is an address to send to."""
        return bool(self.email and self.email.strip())


@dataclass(frozen=True)
class CachedContact:
    """A contact lookup result with the time it was cached."""

    user_id: str
    email: str | None
    name: str | None
    cached_at: datetime  # UTC
