# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from leave_ledger.models.base import now_utc
from leave_ledger.models.enums import OverrideDetection

SETTINGS_ROW_ID = 1


class LeaveSettingsRecord(SQLModel, table=True):
    """Single-row table holding the process-wide leave accrual parameters."""

    __tablename__ = "leave_settings"

    id: int = Field(default=SETTINGS_ROW_ID, primary_key=True)
    monthly_credit: int
    max_carry_forward: int
    max_leaves_per_month: int
    override_detection: str = Field(default=OverrideDetection.HEURISTIC, max_length=50)
    updated_by: uuid.UUID | None = None
    updated_at: datetime = Field(
        default_factory=now_utc,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
