"""Tests for time utilities."""

from datetime import date, time

from goalsetting.utils.time_utils import (
    format_due_date,
    format_relative_due,
    is_known_timezone,
    now_in,
    parse_time_of_day,
    seconds_since_midnight,
)

DEFAULT = time(8, 0)


def test_parse_time_of_day_full():
    assert parse_time_of_day("07:30:15", DEFAULT) == time(7, 30, 15)


def test_parse_time_of_day_without_seconds():
    assert parse_time_of_day("21:15", DEFAULT) == time(21, 15)


def test_parse_time_of_day_falls_back_silently():
    """Missing or malformed values yield the default, never an error."""
    assert parse_time_of_day(None, DEFAULT) == DEFAULT
    assert parse_time_of_day("", DEFAULT) == DEFAULT
    assert parse_time_of_day("half past eight", DEFAULT) == DEFAULT
    assert parse_time_of_day("25:00:00", DEFAULT) == DEFAULT


def test_seconds_since_midnight():
    assert seconds_since_midnight(time(0, 0)) == 0
    assert seconds_since_midnight(time(8, 1, 5)) == 8 * 3600 + 65


def test_now_in_is_timezone_aware():
    now = now_in("America/New_York")
    assert now.tzinfo is not None


def test_format_due_date():
    assert format_due_date(date(2026, 3, 5)) == "Mar 05, 2026"
    assert format_due_date(None) == "No due date"


def test_format_relative_due():
    today = date(2026, 3, 15)
    assert format_relative_due(date(2026, 3, 15), today) == "due today"
    assert format_relative_due(date(2026, 3, 16), today) == "due tomorrow"
    assert format_relative_due(date(2026, 3, 20), today) == "due in 5 days"
    assert format_relative_due(date(2026, 3, 14), today) == "1 day overdue"
    assert format_relative_due(date(2026, 3, 13), today) == "2 days overdue"


def test_seconds_since_midnight_keeps_microseconds():
    assert seconds_since_midnight(time(0, 0, 1, 500000)) == 1.5


def test_is_known_timezone():
    assert is_known_timezone("UTC")
    assert is_known_timezone("America/New_York")
    assert not is_known_timezone("Mars/Olympus")
    assert not is_known_timezone("")
