# ruff: noqa: TC003
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlmodel import Field

from leave_ledger.models.base import TimestampMixin, UUIDBase


class LeaveBalanceAdjustment(UUIDBase, TimestampMixin, table=True):
    """Append-only log of carried-leave credits, debits and corrections."""

    __tablename__ = "leave_balance_adjustment"

    override_id: uuid.UUID = Field(
        sa_column=sa.Column(
            sa.Uuid, sa.ForeignKey("leave_balance_override.id", ondelete="CASCADE"), nullable=False, index=True
        ),
    )
    employee_id: uuid.UUID = Field(index=True)
    employee_type: str = Field(max_length=50)
    adjustment_type: str = Field(max_length=50)
    previous_value: int
    new_value: int
    adjustment_amount: int
    reason: str
    adjusted_by: uuid.UUID
