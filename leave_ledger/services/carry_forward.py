"""Decide, per month, between a manual carry-forward override and the automatic one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from leave_ledger.models.enums import OverrideDetection

if TYPE_CHECKING:
    from leave_ledger.schemas.ledger import LeaveBalanceOverride


@dataclass(frozen=True)
class NoOverride:
    """No administrator correction applies; carry-forward is automatic."""

    additional_credit: int = 0


@dataclass(frozen=True)
class ManualOverride:
    """Administrator correction that replaces the automatic carry-forward."""

    carried_forward: int
    additional_credit: int
    reason: str | None


OverrideState = NoOverride | ManualOverride

FIRST_MONTH = 1


@dataclass(frozen=True)
class CarryForward:
    """Resolved carry-forward for one month."""

    carried_forward: int
    is_auto_carried: bool


def accepts_carry_in(month: int) -> bool:
    """January opens the year and never receives a carry-forward."""
    return month != FIRST_MONTH


def classify_override(
    record: LeaveBalanceOverride | None,
    detection: OverrideDetection = OverrideDetection.HEURISTIC,
) -> OverrideState:
    """Turn a stored override row into an explicit NoOverride / ManualOverride.

    Under HEURISTIC detection a row with zero carry-forward and a blank reason
    is indistinguishable from no row, but its additional_credit still applies.
    """
    if record is None:
        return NoOverride()

    reason = (record.adjustment_reason or "").strip()
    if detection == OverrideDetection.EXPLICIT or record.carried_forward > 0 or reason:
        return ManualOverride(
            carried_forward=record.carried_forward,
            additional_credit=record.additional_credit,
            reason=reason or None,
        )
    return NoOverride(additional_credit=record.additional_credit)


def resolve(month: int, override: OverrideState, auto_candidate: int) -> CarryForward:
    """Return the carry-forward for month, preferring a manual override.

    January never carries anything in, whatever the override says.
    """
    if not accepts_carry_in(month):
        return CarryForward(carried_forward=0, is_auto_carried=False)
    if isinstance(override, ManualOverride):
        return CarryForward(carried_forward=override.carried_forward, is_auto_carried=False)
    return CarryForward(carried_forward=auto_candidate, is_auto_carried=auto_candidate > 0)
