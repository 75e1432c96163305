"""Accrual engine: the month-by-month leave balance recurrence and the ledger read built on it."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from functools import partial, reduce
from typing import TYPE_CHECKING

from leave_ledger.exceptions import NotFoundError
from leave_ledger.models.enums import LeaveCategory
from leave_ledger.schemas.ledger import LedgerResponse, MonthlyLedgerEntry
from leave_ledger.services import carry_forward, usage
from leave_ledger.services.carry_forward import ManualOverride, OverrideState
from leave_ledger.services.employee import get_employee_service
from leave_ledger.services.usage import MonthlyUsage

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.ledger import LeaveApplication, LeaveBalanceOverride, LeaveSettings

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12

# ---------------------------------------------------------------------------
# Pure computation (no DB)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class _MonthInput:
    """Everything the recurrence needs to know about one month besides the running balance."""

    month: int
    usage: MonthlyUsage
    override: OverrideState


@dataclass(frozen=True)
class _FoldState:
    """Accumulator threaded through the twelve months."""

    previous_balance: int = 0
    entries: tuple[MonthlyLedgerEntry, ...] = ()


def _accrue_month(settings: LeaveSettings, state: _FoldState, month_input: _MonthInput) -> _FoldState:
    """Compute one ledger entry from the previous month's balance."""
    month = month_input.month
    override = month_input.override
    is_overridden = isinstance(override, ManualOverride)

    auto_candidate = 0
    if carry_forward.accepts_carry_in(month):
        auto_candidate = min(state.previous_balance, settings.max_carry_forward)
    resolved = carry_forward.resolve(month, override, auto_candidate)

    raw_available = settings.monthly_credit + resolved.carried_forward + override.additional_credit
    available = raw_available if is_overridden else min(raw_available, settings.max_leaves_per_month)

    month_usage = month_input.usage
    balance = max(0, available - month_usage.total_category_usage)

    entry = MonthlyLedgerEntry(
        month=month,
        monthly_credit=settings.monthly_credit,
        carried_forward=resolved.carried_forward,
        additional_credit=override.additional_credit,
        available=available,
        category_usage=dict(month_usage.category_counts),
        uncategorized_days=month_usage.uncategorized_days,
        lop_days=month_usage.lop_days,
        balance=balance,
        is_auto_carried=resolved.is_auto_carried,
        is_overridden=is_overridden,
    )
    return _FoldState(previous_balance=balance, entries=(*state.entries, entry))


def compute_year(
    employee_id: uuid.UUID,
    year: int,
    applications: Iterable[LeaveApplication],
    overrides_by_month: Mapping[int, LeaveBalanceOverride],
    settings: LeaveSettings,
) -> list[MonthlyLedgerEntry]:
    """Compute the twelve ordered ledger entries of employee_id for year.

    Applications belonging to other applicants are ignored. Missing months
    in overrides_by_month mean automatic carry-forward and no additional
    credit. Calling this twice with the same inputs yields equal output.
    """
    own_applications = [a for a in applications if a.applicant_id == employee_id]
    monthly_usage = usage.aggregate(own_applications, year)

    months = [
        _MonthInput(
            month=month,
            usage=monthly_usage.get(month) or MonthlyUsage(),
            override=carry_forward.classify_override(overrides_by_month.get(month), settings.override_detection),
        )
        for month in range(1, MONTHS_PER_YEAR + 1)
    ]

    final_state = reduce(partial(_accrue_month, settings), months, _FoldState())
    logger.debug(
        "Computed %d-month ledger for employee=%s year=%d closing_balance=%d",
        len(final_state.entries),
        employee_id,
        year,
        final_state.previous_balance,
    )
    return list(final_state.entries)


def summarize_year(
    employee_id: uuid.UUID,
    year: int,
    settings: LeaveSettings,
    entries: list[MonthlyLedgerEntry],
) -> LedgerResponse:
    """Wrap computed entries with yearly totals for display."""
    totals = dict.fromkeys(LeaveCategory, 0)
    for entry in entries:
        for category, count in entry.category_usage.items():
            totals[category] += count

    return LedgerResponse(
        employee_id=employee_id,
        year=year,
        settings=settings,
        entries=entries,
        total_category_usage=totals,
        total_lop_days=sum(entry.lop_days for entry in entries),
        closing_balance=entries[-1].balance if entries else 0,
    )


# ---------------------------------------------------------------------------
# DB-backed ledger read
# ---------------------------------------------------------------------------


async def load_year(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> tuple[LeaveSettings, list[MonthlyLedgerEntry]]:
    """Snapshot settings, approved applications and overrides, then run compute_year."""
    from leave_ledger.services.application import fetch_approved_applications
    from leave_ledger.services.override import fetch_overrides
    from leave_ledger.services.settings import fetch_settings

    settings = await fetch_settings(session)
    applications = await fetch_approved_applications(session, employee_id, year)
    overrides = await fetch_overrides(session, employee_id, year)
    return settings, compute_year(employee_id, year, applications, overrides, settings)


async def get_employee_ledger(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> LedgerResponse:
    """Return the twelve-month leave ledger of a known employee."""
    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")

    settings, entries = await load_year(session, employee_id, year)
    return summarize_year(employee_id, year, settings, entries)
