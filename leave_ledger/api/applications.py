# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status

from leave_ledger.api.deps import AdminDep, AuthDep
from leave_ledger.db import SessionDep
from leave_ledger.exceptions import AppError
from leave_ledger.models.enums import LeaveStatus
from leave_ledger.schemas.application import (
    ApplicationListResponse,
    ApplicationResponse,
    ApprovePayload,
    RejectPayload,
    SubmitApplicationPayload,
)
from leave_ledger.schemas.ledger import PaidLopSplit
from leave_ledger.services import application as application_service
from leave_ledger.services import paid_lop

applications_router = APIRouter(
    prefix="/leave-applications",
    tags=["applications"],
)


@applications_router.post("", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(
    payload: SubmitApplicationPayload,
    session: SessionDep,
    auth: AuthDep,
) -> ApplicationResponse:
    """Submit a new leave application."""
    if not auth.is_admin and payload.applicant_id != auth.user_id:
        raise AppError("Cannot apply for leave on behalf of another employee", status_code=status.HTTP_403_FORBIDDEN)
    return await application_service.submit_application(session, auth, payload)


@applications_router.get("/split-preview", response_model=PaidLopSplit)
async def preview_split(
    _auth: AuthDep,
    total_days: int = Query(ge=0),
    paid_days: int = Query(),
) -> PaidLopSplit:
    """Recompute the paid/LOP split for a proposed number of paid days."""
    return paid_lop.adjust(total_days, paid_days)


@applications_router.get("", response_model=ApplicationListResponse)
async def list_applications(
    session: SessionDep,
    auth: AuthDep,
    applicant_id: uuid.UUID | None = Query(default=None),
    status_filter: LeaveStatus | None = Query(default=None, alias="status"),
    year: int | None = Query(default=None, ge=2000, le=2100),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> ApplicationListResponse:
    """List leave applications. Non-admins only see their own."""
    if not auth.is_admin:
        applicant_id = auth.user_id
    return await application_service.list_applications(session, applicant_id, status_filter, year, offset, limit)


@applications_router.get("/{application_id}", response_model=ApplicationResponse)
async def get_application(
    application_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> ApplicationResponse:
    """Get a single leave application."""
    application = await application_service.get_application(session, application_id)
    if not auth.is_admin and application.applicant_id != auth.user_id:
        raise AppError("Leave application not found", status_code=status.HTTP_404_NOT_FOUND)
    return application


@applications_router.post("/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: uuid.UUID,
    payload: ApprovePayload,
    session: SessionDep,
    auth: AdminDep,
) -> ApplicationResponse:
    """Approve a pending leave application, optionally adjusting paid days."""
    return await application_service.approve_application(session, auth, application_id, payload)


@applications_router.post("/{application_id}/reject", response_model=ApplicationResponse)
async def reject_application(
    application_id: uuid.UUID,
    payload: RejectPayload,
    session: SessionDep,
    auth: AdminDep,
) -> ApplicationResponse:
    """Reject a pending leave application."""
    return await application_service.reject_application(session, auth, application_id, payload)


@applications_router.post("/{application_id}/cancel", response_model=ApplicationResponse)
async def cancel_application(
    application_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> ApplicationResponse:
    """Cancel a pending leave application (applicant or admin)."""
    return await application_service.cancel_application(session, auth, application_id)
