# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query

from leave_ledger.api.deps import require_self_or_admin
from leave_ledger.db import SessionDep
from leave_ledger.schemas.ledger import LedgerResponse
from leave_ledger.services import accrual as accrual_service

employee_ledger_router = APIRouter(
    prefix="/employees/{employee_id}/leave-ledger",
    tags=["ledger"],
    dependencies=[Depends(require_self_or_admin)],
)


@employee_ledger_router.get("", response_model=LedgerResponse)
async def get_employee_ledger(
    employee_id: uuid.UUID,
    session: SessionDep,
    year: int | None = Query(default=None, ge=2000, le=2100),
) -> LedgerResponse:
    """Get the twelve-month leave ledger of an employee (defaults to the current year)."""
    target_year = year if year is not None else date.today().year
    return await accrual_service.get_employee_ledger(session, employee_id, target_year)
