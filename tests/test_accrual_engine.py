"""Tests for the twelve-month accrual recurrence (no database)."""

from __future__ import annotations

import uuid
from datetime import date

import pytest

from leave_ledger.models.enums import LeaveCategory, OverrideDetection
from leave_ledger.schemas.ledger import LeaveApplication, LeaveBalanceOverride, LeaveSettings
from leave_ledger.services.accrual import compute_year, summarize_year

EMPLOYEE_ID = uuid.uuid4()
YEAR = 2025

SETTINGS = LeaveSettings(monthly_credit=1, max_carry_forward=1, max_leaves_per_month=2)


def _approved(
    start: date,
    end: date,
    leave_type: str = "casual",
    total_days: int | None = None,
    lop_days: int = 0,
    applicant_id: uuid.UUID = EMPLOYEE_ID,
) -> LeaveApplication:
    total = total_days if total_days is not None else (end - start).days + 1
    return LeaveApplication(
        applicant_id=applicant_id,
        start_date=start,
        end_date=end,
        leave_type=leave_type,
        status="approved",
        total_days=total,
        paid_days=total - lop_days,
        lop_days=lop_days,
    )


# ---------------------------------------------------------------------------
# Shape and defaults
# ---------------------------------------------------------------------------


def test_returns_twelve_ordered_entries() -> None:
    entries = compute_year(EMPLOYEE_ID, YEAR, [], {}, SETTINGS)
    assert [e.month for e in entries] == list(range(1, 13))


def test_no_usage_no_overrides() -> None:
    """Credit 1/month, carry capped at 1, available capped at 2."""
    entries = compute_year(EMPLOYEE_ID, YEAR, [], {}, SETTINGS)

    january = entries[0]
    assert january.carried_forward == 0
    assert january.available == 1
    assert january.balance == 1
    assert january.is_auto_carried is False

    for entry in entries[1:]:
        assert entry.carried_forward == 1
        assert entry.available == 2
        assert entry.balance == 2
        assert entry.is_auto_carried is True
        assert entry.category_usage == {LeaveCategory.SICK: 0, LeaveCategory.CASUAL: 0}
        assert entry.lop_days == 0


def test_example_two_casual_days_in_february() -> None:
    # Mon 2025-02-03 .. Tue 2025-02-04
    entries = compute_year(EMPLOYEE_ID, YEAR, [_approved(date(2025, 2, 3), date(2025, 2, 4))], {}, SETTINGS)
    january, february, march, april = entries[:4]

    assert (january.available, january.balance) == (1, 1)

    assert february.carried_forward == 1
    assert february.available == 2
    assert february.category_usage[LeaveCategory.CASUAL] == 2
    assert february.balance == 0

    assert march.carried_forward == 0
    assert march.is_auto_carried is False
    assert (march.available, march.balance) == (1, 1)

    assert april.carried_forward == 1
    assert april.balance == 2


def test_balance_never_negative() -> None:
    # A full work week in March exceeds the 2-day monthly cap.
    entries = compute_year(
        EMPLOYEE_ID, YEAR, [_approved(date(2025, 3, 3), date(2025, 3, 9), "sick", total_days=5)], {}, SETTINGS
    )
    march = entries[2]
    assert march.category_usage[LeaveCategory.SICK] == 5
    assert march.balance == 0
    assert all(e.balance >= 0 for e in entries)
    assert entries[3].carried_forward == 0


def test_carry_forward_capped() -> None:
    settings = LeaveSettings(monthly_credit=3, max_carry_forward=2, max_leaves_per_month=10)
    entries = compute_year(EMPLOYEE_ID, YEAR, [], {}, settings)
    assert entries[0].balance == 3
    assert entries[1].carried_forward == 2
    assert entries[1].available == 5
    assert entries[2].carried_forward == 2


def test_available_capped_for_automatic_months() -> None:
    settings = LeaveSettings(monthly_credit=2, max_carry_forward=5, max_leaves_per_month=3)
    entries = compute_year(EMPLOYEE_ID, YEAR, [], {5: LeaveBalanceOverride(additional_credit=4)}, settings)
    for entry in entries:
        assert entry.available <= settings.max_leaves_per_month


def test_other_applicants_ignored() -> None:
    other = _approved(date(2025, 2, 3), date(2025, 2, 4), applicant_id=uuid.uuid4())
    entries = compute_year(EMPLOYEE_ID, YEAR, [other], {}, SETTINGS)
    assert entries[1].category_usage[LeaveCategory.CASUAL] == 0
    assert entries[1].balance == 2


# ---------------------------------------------------------------------------
# Overrides
# ---------------------------------------------------------------------------


def test_example_override_bypasses_cap() -> None:
    overrides = {5: LeaveBalanceOverride(carried_forward=3, additional_credit=0, adjustment_reason="special grant")}
    entries = compute_year(EMPLOYEE_ID, YEAR, [], overrides, SETTINGS)
    may = entries[4]
    assert may.carried_forward == 3
    assert may.available == 4
    assert may.is_auto_carried is False
    assert may.is_overridden is True
    # June carries the capped May balance forward automatically.
    assert entries[5].carried_forward == 1
    assert entries[5].is_auto_carried is True


@pytest.mark.parametrize("auto_balance_settings", [(1, 1, 2), (5, 4, 10), (0, 0, 0)])
def test_override_with_reason_takes_precedence(auto_balance_settings: tuple[int, int, int]) -> None:
    credit, carry_cap, monthly_cap = auto_balance_settings
    settings = LeaveSettings(monthly_credit=credit, max_carry_forward=carry_cap, max_leaves_per_month=monthly_cap)
    overrides = {7: LeaveBalanceOverride(carried_forward=0, adjustment_reason="carry reset")}
    entries = compute_year(EMPLOYEE_ID, YEAR, [], overrides, settings)
    july = entries[6]
    assert july.carried_forward == 0
    assert july.is_auto_carried is False
    assert july.available == credit


def test_additional_credit_added() -> None:
    overrides = {3: LeaveBalanceOverride(carried_forward=1, additional_credit=2, adjustment_reason="bonus days")}
    entries = compute_year(EMPLOYEE_ID, YEAR, [], overrides, SETTINGS)
    assert entries[2].additional_credit == 2
    assert entries[2].available == 1 + 1 + 2


def test_additional_credit_without_manual_override_is_capped() -> None:
    overrides = {3: LeaveBalanceOverride(additional_credit=2)}
    entries = compute_year(EMPLOYEE_ID, YEAR, [], overrides, SETTINGS)
    march = entries[2]
    assert march.additional_credit == 2
    assert march.is_overridden is False
    assert march.is_auto_carried is True
    assert march.available == 2


def test_zero_override_under_explicit_detection_suppresses_auto_carry() -> None:
    settings = SETTINGS.model_copy(update={"override_detection": OverrideDetection.EXPLICIT})
    overrides = {4: LeaveBalanceOverride()}

    heuristic = compute_year(EMPLOYEE_ID, YEAR, [], overrides, SETTINGS)
    explicit = compute_year(EMPLOYEE_ID, YEAR, [], overrides, settings)

    assert heuristic[3].carried_forward == 1
    assert heuristic[3].is_auto_carried is True
    assert explicit[3].carried_forward == 0
    assert explicit[3].is_auto_carried is False
    assert explicit[3].is_overridden is True


@pytest.mark.parametrize(
    "override",
    [
        LeaveBalanceOverride(carried_forward=4, adjustment_reason="opening balance"),
        LeaveBalanceOverride(carried_forward=0, additional_credit=3),
        LeaveBalanceOverride(),
    ],
)
def test_january_has_no_carry_in(override: LeaveBalanceOverride) -> None:
    for settings in (SETTINGS, SETTINGS.model_copy(update={"override_detection": OverrideDetection.EXPLICIT})):
        entries = compute_year(EMPLOYEE_ID, YEAR, [], {1: override}, settings)
        assert entries[0].carried_forward == 0


# ---------------------------------------------------------------------------
# Usage details
# ---------------------------------------------------------------------------


def test_uncategorized_leave_visible_but_not_consuming_balance() -> None:
    entries = compute_year(
        EMPLOYEE_ID, YEAR, [_approved(date(2025, 2, 3), date(2025, 2, 5), "earned", total_days=3)], {}, SETTINGS
    )
    february = entries[1]
    assert february.uncategorized_days == 3
    assert february.total_usage == 0
    assert february.balance == 2


def test_lop_pinned_to_start_month() -> None:
    # Thu 2025-01-30 .. Tue 2025-02-04, 4 weekdays, 3 of them LOP.
    application = _approved(date(2025, 1, 30), date(2025, 2, 4), "casual", total_days=4, lop_days=3)
    entries = compute_year(EMPLOYEE_ID, YEAR, [application], {}, SETTINGS)
    assert entries[0].lop_days == 3
    assert entries[1].lop_days == 0
    assert entries[0].category_usage[LeaveCategory.CASUAL] == 2
    assert entries[1].category_usage[LeaveCategory.CASUAL] == 2


def test_idempotent() -> None:
    applications = [
        _approved(date(2025, 2, 3), date(2025, 2, 4)),
        _approved(date(2025, 6, 2), date(2025, 6, 6), "sick", total_days=5, lop_days=3),
    ]
    overrides = {9: LeaveBalanceOverride(carried_forward=2, additional_credit=1, adjustment_reason="transfer")}
    first = compute_year(EMPLOYEE_ID, YEAR, applications, overrides, SETTINGS)
    second = compute_year(EMPLOYEE_ID, YEAR, applications, overrides, SETTINGS)
    assert [e.model_dump_json() for e in first] == [e.model_dump_json() for e in second]


# ---------------------------------------------------------------------------
# summarize_year
# ---------------------------------------------------------------------------


def test_summary_totals() -> None:
    applications = [
        _approved(date(2025, 2, 3), date(2025, 2, 4)),
        _approved(date(2025, 6, 2), date(2025, 6, 6), "sick", total_days=5, lop_days=3),
    ]
    entries = compute_year(EMPLOYEE_ID, YEAR, applications, {}, SETTINGS)
    summary = summarize_year(EMPLOYEE_ID, YEAR, SETTINGS, entries)

    assert summary.total_category_usage == {LeaveCategory.SICK: 5, LeaveCategory.CASUAL: 2}
    assert summary.total_lop_days == 3
    assert summary.closing_balance == entries[-1].balance
    assert len(summary.entries) == 12
