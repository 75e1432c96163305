"""Paid/LOP (loss-of-pay) split of a leave application's day count."""

from __future__ import annotations

from leave_ledger.schemas.ledger import PaidLopSplit


def adjust(total_days: int, proposed_paid_days: int) -> PaidLopSplit:
    """Clamp proposed_paid_days to [0, total_days] and book the remainder as LOP.

    Out-of-range input is clamped, never rejected, so
    paid_days + lop_days == total_days always holds.
    """
    total = max(total_days, 0)
    paid = max(0, min(proposed_paid_days, total))
    return PaidLopSplit(paid_days=paid, lop_days=total - paid)


def split_for_submission(total_days: int, available_balance: int) -> PaidLopSplit:
    """Initial split at submission: days are paid while the balance lasts, the rest is LOP."""
    return adjust(total_days, available_balance)
