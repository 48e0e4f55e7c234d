"""Tests for recurrence date arithmetic."""

from datetime import date

import pytest

from goalsetting.engine.recurrence import advance_from_today, next_due_date

TODAY = date(2026, 3, 10)


@pytest.mark.parametrize("current", [None, date(2020, 1, 1), TODAY, date(2027, 6, 15)])
def test_none_rule_returns_input_unchanged(current):
    """A non-recurring task keeps whatever due date it had."""
    assert next_due_date(current, "none", TODAY) == current


def test_daily_without_due_date_is_tomorrow():
    assert next_due_date(None, "daily", TODAY) == date(2026, 3, 11)


def test_past_due_date_is_clamped_to_today():
    """Overdue tasks step forward from today, not from the old date."""
    assert next_due_date(date(2026, 2, 1), "daily", TODAY) == date(2026, 3, 11)
    assert next_due_date(date(2025, 12, 25), "weekly", TODAY) == date(2026, 3, 17)


def test_future_due_date_is_the_base():
    assert next_due_date(date(2026, 4, 1), "weekly", TODAY) == date(2026, 4, 8)


def test_due_today_steps_from_today():
    assert next_due_date(TODAY, "monthly", TODAY) == date(2026, 4, 10)


def test_monthly_clamps_to_end_of_month():
    """Jan 31 + 1 month lands on the last day of February."""
    today = date(2026, 1, 1)
    assert next_due_date(date(2026, 1, 31), "monthly", today) == date(2026, 2, 28)

    leap_today = date(2028, 1, 1)
    assert next_due_date(date(2028, 1, 31), "monthly", leap_today) == date(2028, 2, 29)


def test_advance_from_today_ignores_existing_due_date():
    assert advance_from_today("daily", TODAY) == date(2026, 3, 11)
    assert advance_from_today("weekly", TODAY) == date(2026, 3, 17)
    assert advance_from_today("monthly", date(2026, 10, 31)) == date(2026, 11, 30)
    assert advance_from_today("none", TODAY) is None
