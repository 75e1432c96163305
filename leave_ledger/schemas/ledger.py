# ruff: noqa: TC003
"""Value objects consumed and produced by the leave ledger engine.

Inputs are validated on construction so that the engine never sees a broken
paid/LOP split or an inverted date range.
"""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from leave_ledger.models.enums import LeaveCategory, LeaveStatus, OverrideDetection

# ---------------------------------------------------------------------------
# Engine inputs
# ---------------------------------------------------------------------------


class LeaveSettings(BaseModel):
    """Accrual parameters, fixed for the duration of one ledger computation."""

    model_config = ConfigDict(frozen=True)

    monthly_credit: int = Field(ge=0)
    max_carry_forward: int = Field(ge=0)
    max_leaves_per_month: int = Field(ge=0)
    override_detection: OverrideDetection = OverrideDetection.HEURISTIC


class LeaveApplication(BaseModel):
    """A leave application as seen by the ledger engine."""

    model_config = ConfigDict(frozen=True)

    applicant_id: uuid.UUID
    start_date: date
    end_date: date
    leave_type: str
    status: str
    total_days: int = Field(ge=0)
    paid_days: int = Field(ge=0)
    lop_days: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_lop(self) -> bool:
        return self.lop_days > 0

    @property
    def is_approved(self) -> bool:
        return self.status == LeaveStatus.APPROVED

    @model_validator(mode="after")
    def _validate_application(self) -> Self:
        if self.start_date > self.end_date:
            msg = "start_date must not be after end_date"
            raise ValueError(msg)
        if self.paid_days + self.lop_days != self.total_days:
            msg = (
                f"paid_days ({self.paid_days}) + lop_days ({self.lop_days}) "
                f"must equal total_days ({self.total_days})"
            )
            raise ValueError(msg)
        return self


class LeaveBalanceOverride(BaseModel):
    """Stored administrator correction for one employee/year/month."""

    model_config = ConfigDict(frozen=True)

    carried_forward: int = Field(default=0, ge=0)
    additional_credit: int = Field(default=0, ge=0)
    adjustment_reason: str | None = None
    adjusted_at: datetime | None = None


# ---------------------------------------------------------------------------
# Engine outputs
# ---------------------------------------------------------------------------


class PaidLopSplit(BaseModel):
    """Paid and loss-of-pay portions of a leave application's day count."""

    model_config = ConfigDict(frozen=True)

    paid_days: int = Field(ge=0)
    lop_days: int = Field(ge=0)

    @property
    def total_days(self) -> int:
        return self.paid_days + self.lop_days


class MonthlyLedgerEntry(BaseModel):
    """Fully computed leave balance of one employee for one calendar month."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(ge=1, le=12)
    monthly_credit: int
    carried_forward: int
    additional_credit: int
    available: int
    category_usage: dict[LeaveCategory, int]
    uncategorized_days: int = 0
    lop_days: int
    balance: int = Field(ge=0)
    is_auto_carried: bool
    is_overridden: bool = False

    @property
    def total_usage(self) -> int:
        return sum(self.category_usage.values())


# ---------------------------------------------------------------------------
# API response schemas
# ---------------------------------------------------------------------------


class LedgerResponse(BaseModel):
    """Twelve-month ledger for one employee and year."""

    employee_id: uuid.UUID
    year: int
    settings: LeaveSettings
    entries: list[MonthlyLedgerEntry]
    total_category_usage: dict[LeaveCategory, int]
    total_lop_days: int
    closing_balance: int
