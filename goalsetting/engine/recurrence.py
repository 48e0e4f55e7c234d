"""Recurrence date arithmetic."""

from datetime import date

from dateutil.relativedelta import relativedelta

from goalsetting.db.models import RecurrenceRule

# relativedelta clamps month arithmetic to the last valid day (Jan 31 -> Feb 28/29)
RECURRENCE_STEPS: dict[str, relativedelta] = {
    "daily": relativedelta(days=1),
    "weekly": relativedelta(days=7),
    "monthly": relativedelta(months=1),
}


def next_due_date(
    current_due: date | None, rule: RecurrenceRule, today: date | None = None
) -> date | None:
    """Get the next due date for a recurring task.

    The base date is the current due date, or today when there is none or
    when it already lies in the past, so the result is never behind today.

    Args:
        current_due: The task's current due date, if any
        rule: Recurrence rule ("none", "daily", "weekly", "monthly")
        today: Reference date, defaults to the system's current date

    Returns:
        The advanced date, or current_due unchanged for "none"
    """
    step = RECURRENCE_STEPS.get(rule)
    if step is None:
        return current_due

    if today is None:
        today = date.today()

    base = current_due if current_due is not None else today
    if base < today:
        base = today

    return base + step


def advance_from_today(rule: RecurrenceRule, today: date | None = None) -> date | None:
    """Get the due date a recurring task gets when it is reset.

    Unlike next_due_date the task's existing due date plays no part: the step
    is always taken from today. Returns None for "none".
    """
    step = RECURRENCE_STEPS.get(rule)
    if step is None:
        return None

    if today is None:
        today = date.today()

    return today + step

