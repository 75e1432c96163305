"""Per-month leave usage aggregated from approved applications."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from leave_ledger.models.enums import LeaveCategory
from leave_ledger.services import calendar_span

if TYPE_CHECKING:
    from collections.abc import Iterable

    from leave_ledger.schemas.ledger import LeaveApplication

_TRACKED = {category.value: category for category in LeaveCategory}


def _empty_counts() -> dict[LeaveCategory, int]:
    return dict.fromkeys(LeaveCategory, 0)


@dataclass
class MonthlyUsage:
    """Weekday usage and LOP days attributed to one month."""

    category_counts: dict[LeaveCategory, int] = field(default_factory=_empty_counts)
    uncategorized_days: int = 0
    lop_days: int = 0

    @property
    def total_category_usage(self) -> int:
        return sum(self.category_counts.values())


def category_for(leave_type: str) -> LeaveCategory | None:
    """Map a leave type tag to the tracked category it counts against, if any."""
    return _TRACKED.get(leave_type)


def aggregate(applications: Iterable[LeaveApplication], year: int) -> dict[int, MonthlyUsage]:
    """Build month -> MonthlyUsage for every month of year touched by an approved application.

    Weekdays are split across the months they fall in, clipped to the year.
    Leave types outside LeaveCategory go to uncategorized_days and never
    count against the balance. LOP days are booked in full to the month of
    start_date, and only when start_date lies in year.
    """
    year_start = date(year, 1, 1)
    year_end = date(year, 12, 31)
    usage: dict[int, MonthlyUsage] = {}

    for application in applications:
        if not application.is_approved:
            continue

        category = category_for(application.leave_type)
        span_start = max(application.start_date, year_start)
        span_end = min(application.end_date, year_end)

        for month, weekdays in calendar_span.split(span_start, span_end):
            bucket = usage.setdefault(month, MonthlyUsage())
            if category is None:
                bucket.uncategorized_days += weekdays
            else:
                bucket.category_counts[category] += weekdays

        if application.is_lop and application.lop_days > 0 and application.start_date.year == year:
            bucket = usage.setdefault(application.start_date.month, MonthlyUsage())
            bucket.lop_days += application.lop_days

    return usage
