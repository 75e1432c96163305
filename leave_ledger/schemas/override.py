# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated, Self

from pydantic import AfterValidator, BaseModel, Field, model_validator

from leave_ledger.models.enums import AdjustmentType, EmployeeType
from leave_ledger.services.carry_forward import accepts_carry_in


def _require_text(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        msg = "reason must not be blank"
        raise ValueError(msg)
    return stripped


ReasonText = Annotated[str, Field(min_length=1, max_length=1000), AfterValidator(_require_text)]


class UpsertOverridePayload(BaseModel):
    """Request body for setting one month's carry-forward and additional credit."""

    carried_forward: int = Field(ge=0)
    additional_credit: int = Field(default=0, ge=0)
    reason: ReasonText


class CarriedLeaveAdjustmentPayload(BaseModel):
    """Request body for crediting, debiting or correcting carried leave."""

    year: int = Field(ge=2000, le=2100)
    month: int = Field(ge=1, le=12)
    adjustment_type: AdjustmentType
    amount: int = Field(ge=0)
    reason: ReasonText

    @model_validator(mode="after")
    def _validate_january(self) -> Self:
        if not accepts_carry_in(self.month) and self.adjustment_type != AdjustmentType.DEBIT and self.amount > 0:
            msg = "January has no carry-forward; only a zero correction or a debit is allowed"
            raise ValueError(msg)
        return self


class OverrideResponse(BaseModel):
    """A stored monthly override."""

    id: uuid.UUID
    employee_id: uuid.UUID
    employee_type: EmployeeType
    year: int
    month: int
    carried_forward: int
    additional_credit: int
    adjustment_reason: str | None
    adjusted_at: datetime | None
    adjusted_by: uuid.UUID | None


class OverrideListResponse(BaseModel):
    """All overrides stored for an employee and year."""

    items: list[OverrideResponse]
    total: int


class AdjustmentResponse(BaseModel):
    """Result of a carried-leave adjustment."""

    id: uuid.UUID
    override_id: uuid.UUID
    employee_id: uuid.UUID
    adjustment_type: AdjustmentType
    previous_value: int
    new_value: int
    adjustment_amount: int
    reason: str
    adjusted_by: uuid.UUID
    created_at: datetime
