# ruff: noqa: TC001
from __future__ import annotations

from fastapi import APIRouter

from leave_ledger.api.deps import AdminDep, AuthDep
from leave_ledger.db import SessionDep
from leave_ledger.schemas.ledger import LeaveSettings
from leave_ledger.schemas.settings import UpdateLeaveSettingsPayload
from leave_ledger.services import settings as settings_service

leave_settings_router = APIRouter(
    prefix="/leave-settings",
    tags=["settings"],
)


@leave_settings_router.get("", response_model=LeaveSettings)
async def get_leave_settings(
    session: SessionDep,
    _auth: AuthDep,
) -> LeaveSettings:
    """Get the leave accrual parameters used by the ledger."""
    return await settings_service.fetch_settings(session)


@leave_settings_router.put("", response_model=LeaveSettings)
async def update_leave_settings(
    payload: UpdateLeaveSettingsPayload,
    session: SessionDep,
    auth: AdminDep,
) -> LeaveSettings:
    """Replace the leave accrual parameters."""
    return await settings_service.update_leave_settings(session, auth, payload)
