# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date, datetime

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase
from leave_ledger.models.enums import LeaveStatus


class LeaveApplicationRecord(UUIDBase, TimestampMixin, table=True):
    """A leave application with its approval state and paid/LOP split."""

    __tablename__ = "leave_application"
    __table_args__ = (
        sa.Index("ix_leave_application_applicant_status", "applicant_id", "status"),
        sa.CheckConstraint("paid_days + lop_days = total_days", name="ck_leave_application_split"),
    )

    applicant_id: uuid.UUID = Field(index=True)
    start_date: date
    end_date: date
    leave_type: str = Field(max_length=50)
    reason: str | None = None
    status: str = Field(
        default=LeaveStatus.PENDING, max_length=50, index=True, sa_column_kwargs={"server_default": "pending"}
    )
    total_days: int
    paid_days: int
    lop_days: int = Field(default=0, sa_column_kwargs={"server_default": "0"})
    submitted_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_at: datetime | None = Field(default=None, sa_type=sa.DateTime(timezone=True))  # ty: ignore[invalid-argument-type]
    decided_by: uuid.UUID | None = None
    decision_note: str | None = None

    @property
    def is_lop(self) -> bool:
        return self.lop_days > 0
