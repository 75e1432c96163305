"""Attribute the weekdays of a date range to the calendar months they fall in."""

from __future__ import annotations

from datetime import date, timedelta

# date.weekday(): Monday == 0 ... Friday == 4.
_LAST_WEEKDAY = 4
_ONE_DAY = timedelta(days=1)


def is_weekday(day: date) -> bool:
    return day.weekday() <= _LAST_WEEKDAY


def split(start_date: date, end_date: date) -> list[tuple[int, int]]:
    """Return (month, weekday_count) pairs for every month the inclusive range touches.

    Saturdays and Sundays are skipped. A month the range touches only on a
    weekend is still listed, with a count of 0. Months appear in the order
    they are first reached, so a range crossing a year boundary lists
    December before January. An inverted range yields an empty list.
    """
    counts: dict[int, int] = {}
    current = start_date
    while current <= end_date:
        counts.setdefault(current.month, 0)
        if is_weekday(current):
            counts[current.month] += 1
        current += _ONE_DAY
    return list(counts.items())


def count_weekdays(start_date: date, end_date: date) -> int:
    """Count the Monday-Friday days in the inclusive range."""
    return sum(count for _, count in split(start_date, end_date))
