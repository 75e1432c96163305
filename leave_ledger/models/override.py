# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase
from leave_ledger.models.enums import EmployeeType


class LeaveBalanceOverrideRecord(UUIDBase, TimestampMixin, table=True):
    """Administrator correction to one month's carry-forward and extra credit."""

    __tablename__ = "leave_balance_override"
    __table_args__ = (
        sa.UniqueConstraint("employee_id", "year", "month", name="uq_leave_override_month"),
        sa.CheckConstraint("month BETWEEN 1 AND 12", name="ck_leave_override_month"),
    )

    employee_id: uuid.UUID = Field(index=True)
    employee_type: str = Field(default=EmployeeType.STAFF, max_length=50)
    year: int
    month: int
    carried_forward: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    additional_credit: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    adjustment_reason: str | None = None
    adjusted_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    adjusted_by: uuid.UUID | None = None
