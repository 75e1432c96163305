# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Path, Query, status

from leave_ledger.api.deps import AdminDep, require_self_or_admin
from leave_ledger.db import SessionDep
from leave_ledger.schemas.override import (
    AdjustmentResponse,
    CarriedLeaveAdjustmentPayload,
    OverrideListResponse,
    OverrideResponse,
    UpsertOverridePayload,
)
from leave_ledger.services import override as override_service

employee_overrides_router = APIRouter(
    prefix="/employees/{employee_id}",
    tags=["overrides"],
    dependencies=[Depends(require_self_or_admin)],
)


@employee_overrides_router.get("/leave-overrides", response_model=OverrideListResponse)
async def list_overrides(
    employee_id: uuid.UUID,
    session: SessionDep,
    year: int = Query(ge=2000, le=2100),
) -> OverrideListResponse:
    """List the stored monthly overrides of an employee's year."""
    return await override_service.list_overrides(session, employee_id, year)


@employee_overrides_router.put("/leave-overrides/{year}/{month}", response_model=OverrideResponse)
async def upsert_override(
    employee_id: uuid.UUID,
    payload: UpsertOverridePayload,
    session: SessionDep,
    auth: AdminDep,
    year: int = Path(ge=2000, le=2100),
    month: int = Path(ge=1, le=12),
) -> OverrideResponse:
    """Set a month's carried-forward days and additional credit."""
    return await override_service.upsert_override(session, auth, employee_id, year, month, payload)


@employee_overrides_router.post(
    "/carried-leave-adjustments",
    response_model=AdjustmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def adjust_carried_leave(
    employee_id: uuid.UUID,
    payload: CarriedLeaveAdjustmentPayload,
    session: SessionDep,
    auth: AdminDep,
) -> AdjustmentResponse:
    """Credit, debit or correct a month's carried leave."""
    return await override_service.adjust_carried_leave(session, auth, employee_id, payload)
