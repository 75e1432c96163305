# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Self

from pydantic import BaseModel, Field, model_validator

from leave_ledger.models.enums import LeaveStatus, LeaveType

# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------


class SubmitApplicationPayload(BaseModel):
    """Request body for submitting a new leave application."""

    applicant_id: uuid.UUID
    start_date: date
    end_date: date
    leave_type: LeaveType
    reason: str | None = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def _validate_dates(self) -> Self:
        if self.end_date < self.start_date:
            msg = "end_date must not be before start_date"
            raise ValueError(msg)
        return self


class ApprovePayload(BaseModel):
    """Request body for approving a leave application.

    When paid_days is omitted the split computed at submission is kept;
    otherwise it is clamped to [0, total_days] and the rest becomes LOP.
    """

    paid_days: int | None = None
    note: str | None = Field(default=None, max_length=1000)


class RejectPayload(BaseModel):
    """Request body for rejecting a leave application."""

    note: str = Field(min_length=1, max_length=1000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ApplicationResponse(BaseModel):
    """Response schema for a single leave application."""

    id: uuid.UUID
    applicant_id: uuid.UUID
    start_date: date
    end_date: date
    leave_type: str
    reason: str | None
    status: LeaveStatus
    total_days: int
    paid_days: int
    lop_days: int
    is_lop: bool
    submitted_at: datetime | None
    decided_at: datetime | None
    decided_by: uuid.UUID | None
    decision_note: str | None
    created_at: datetime


class ApplicationListResponse(BaseModel):
    """Paginated list of leave applications."""

    items: list[ApplicationResponse]
    total: int
