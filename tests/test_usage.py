"""Tests for aggregating approved leave into per-month usage."""

from __future__ import annotations

import uuid
from datetime import date

from leave_ledger.models.enums import LeaveCategory
from leave_ledger.schemas.ledger import LeaveApplication
from leave_ledger.services.usage import MonthlyUsage, aggregate, category_for

APPLICANT_ID = uuid.uuid4()


def _application(
    start: date,
    end: date,
    leave_type: str = "casual",
    status: str = "approved",
    total_days: int = 1,
    lop_days: int = 0,
) -> LeaveApplication:
    return LeaveApplication(
        applicant_id=APPLICANT_ID,
        start_date=start,
        end_date=end,
        leave_type=leave_type,
        status=status,
        total_days=total_days,
        paid_days=total_days - lop_days,
        lop_days=lop_days,
    )


def test_empty_input_produces_no_months() -> None:
    assert aggregate([], 2025) == {}


def test_weekdays_counted_in_category() -> None:
    # Mon 2025-02-03 .. Tue 2025-02-04
    usage = aggregate([_application(date(2025, 2, 3), date(2025, 2, 4), total_days=2)], 2025)
    assert usage[2].category_counts == {LeaveCategory.SICK: 0, LeaveCategory.CASUAL: 2}
    assert usage[2].lop_days == 0


def test_full_week_contributes_five() -> None:
    usage = aggregate([_application(date(2025, 1, 6), date(2025, 1, 12), "sick", total_days=5)], 2025)
    assert usage[1].category_counts[LeaveCategory.SICK] == 5


def test_non_approved_applications_ignored() -> None:
    applications = [
        _application(date(2025, 3, 3), date(2025, 3, 3), status="pending"),
        _application(date(2025, 3, 4), date(2025, 3, 4), status="rejected"),
        _application(date(2025, 3, 5), date(2025, 3, 5), status="cancelled"),
    ]
    assert aggregate(applications, 2025) == {}


def test_untracked_type_goes_to_uncategorized() -> None:
    usage = aggregate([_application(date(2025, 3, 3), date(2025, 3, 5), "earned", total_days=3)], 2025)
    assert usage[3].total_category_usage == 0
    assert usage[3].uncategorized_days == 3


def test_span_split_across_months() -> None:
    usage = aggregate([_application(date(2025, 1, 30), date(2025, 2, 4), "sick", total_days=4)], 2025)
    assert usage[1].category_counts[LeaveCategory.SICK] == 2
    assert usage[2].category_counts[LeaveCategory.SICK] == 2


def test_lop_attributed_wholly_to_start_month() -> None:
    """LOP of a leave spanning January and February is booked entirely in January."""
    application = _application(date(2025, 1, 30), date(2025, 2, 4), total_days=4, lop_days=3)
    usage = aggregate([application], 2025)
    assert usage[1].lop_days == 3
    assert usage[2].lop_days == 0


def test_span_clipped_to_year() -> None:
    # Mon 2024-12-30 .. Fri 2025-01-03
    application = _application(date(2024, 12, 30), date(2025, 1, 3), total_days=5, lop_days=2)

    usage_2025 = aggregate([application], 2025)
    assert set(usage_2025) == {1}
    assert usage_2025[1].category_counts[LeaveCategory.CASUAL] == 3
    # LOP belongs to the start month, which lies in 2024.
    assert usage_2025[1].lop_days == 0

    usage_2024 = aggregate([application], 2024)
    assert set(usage_2024) == {12}
    assert usage_2024[12].category_counts[LeaveCategory.CASUAL] == 2
    assert usage_2024[12].lop_days == 2


def test_contributions_are_additive() -> None:
    applications = [
        _application(date(2025, 4, 1), date(2025, 4, 2), "sick", total_days=2, lop_days=1),
        _application(date(2025, 4, 7), date(2025, 4, 7), "casual"),
        _application(date(2025, 4, 8), date(2025, 4, 9), "sick", total_days=2, lop_days=2),
    ]
    usage = aggregate(applications, 2025)
    assert usage[4].category_counts == {LeaveCategory.SICK: 4, LeaveCategory.CASUAL: 1}
    assert usage[4].lop_days == 3


def test_category_for() -> None:
    assert category_for("sick") == LeaveCategory.SICK
    assert category_for("casual") == LeaveCategory.CASUAL
    assert category_for("earned") is None
    assert category_for("bereavement") is None


def test_monthly_usage_default_has_every_category() -> None:
    assert MonthlyUsage().category_counts == {LeaveCategory.SICK: 0, LeaveCategory.CASUAL: 0}
