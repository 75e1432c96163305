# ruff: noqa: TC001, TC003
from __future__ import annotations

from pydantic import BaseModel, Field

from leave_ledger.models.enums import OverrideDetection


class UpdateLeaveSettingsPayload(BaseModel):
    """Request body for replacing the leave accrual parameters."""

    monthly_credit: int = Field(ge=0, le=31)
    max_carry_forward: int = Field(ge=0, le=366)
    max_leaves_per_month: int = Field(ge=0, le=31)
    override_detection: OverrideDetection = OverrideDetection.HEURISTIC
