# ruff: noqa: TC003
"""Application store and approval workflow for leave applications."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from fastapi import status
from pydantic import ValidationError
from sqlalchemy import extract, func, select
from sqlmodel import col

from leave_ledger.exceptions import AppError, InvalidTransitionError, NotFoundError, PreconditionViolationError
from leave_ledger.models.application import LeaveApplicationRecord
from leave_ledger.models.enums import AuditAction, AuditEntityType, LeaveStatus
from leave_ledger.schemas.application import ApplicationListResponse, ApplicationResponse
from leave_ledger.schemas.ledger import LeaveApplication
from leave_ledger.services import calendar_span, paid_lop
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log
from leave_ledger.services.employee import get_employee_service

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.application import ApprovePayload, RejectPayload, SubmitApplicationPayload
    from leave_ledger.schemas.auth import AuthContext

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _build_application_response(record: LeaveApplicationRecord) -> ApplicationResponse:
    """Map an application row to its response schema."""
    return ApplicationResponse(
        id=record.id,
        applicant_id=record.applicant_id,
        start_date=record.start_date,
        end_date=record.end_date,
        leave_type=record.leave_type,
        reason=record.reason,
        status=LeaveStatus(record.status),
        total_days=record.total_days,
        paid_days=record.paid_days,
        lop_days=record.lop_days,
        is_lop=record.is_lop,
        submitted_at=record.submitted_at,
        decided_at=record.decided_at,
        decided_by=record.decided_by,
        decision_note=record.decision_note,
        created_at=record.created_at,
    )


def to_leave_application(record: LeaveApplicationRecord) -> LeaveApplication:
    """Convert a stored row into the validated engine value.

    Raises PreconditionViolationError when the stored range or split is inconsistent.
    """
    try:
        return LeaveApplication(
            applicant_id=record.applicant_id,
            start_date=record.start_date,
            end_date=record.end_date,
            leave_type=record.leave_type,
            status=record.status,
            total_days=record.total_days,
            paid_days=record.paid_days,
            lop_days=record.lop_days,
        )
    except ValidationError as exc:
        errors = "; ".join(str(error["msg"]) for error in exc.errors(include_url=False))
        raise PreconditionViolationError(f"Leave application {record.id} is inconsistent: {errors}") from exc


async def _get_application_or_404(session: AsyncSession, application_id: uuid.UUID) -> LeaveApplicationRecord:
    """Fetch an application by ID. Raises 404 if not found."""
    record = await session.get(LeaveApplicationRecord, application_id)
    if record is None:
        raise NotFoundError("Leave application not found")
    return record


def _require_pending(record: LeaveApplicationRecord, action: str) -> None:
    if record.status != LeaveStatus.PENDING:
        raise InvalidTransitionError(f"Cannot {action} a leave application with status '{record.status}'")


# ---------------------------------------------------------------------------
# Application store
# ---------------------------------------------------------------------------


async def fetch_approved_applications(
    session: AsyncSession,
    applicant_id: uuid.UUID,
    year: int,
) -> list[LeaveApplication]:
    """Return the applicant's approved applications overlapping the given year."""
    result = await session.execute(
        select(LeaveApplicationRecord)
        .where(
            col(LeaveApplicationRecord.applicant_id) == applicant_id,
            col(LeaveApplicationRecord.status) == LeaveStatus.APPROVED.value,
            col(LeaveApplicationRecord.start_date) <= date(year, 12, 31),
            col(LeaveApplicationRecord.end_date) >= date(year, 1, 1),
        )
        .order_by(col(LeaveApplicationRecord.start_date), col(LeaveApplicationRecord.created_at))
    )
    return [to_leave_application(record) for record in result.scalars().all()]


async def get_application(session: AsyncSession, application_id: uuid.UUID) -> ApplicationResponse:
    """Get a single leave application."""
    record = await _get_application_or_404(session, application_id)
    return _build_application_response(record)


async def list_applications(
    session: AsyncSession,
    applicant_id: uuid.UUID | None = None,
    status_filter: LeaveStatus | None = None,
    year: int | None = None,
    offset: int = 0,
    limit: int = 50,
) -> ApplicationListResponse:
    """List leave applications, newest first, with optional filters."""
    filters = []
    if applicant_id is not None:
        filters.append(col(LeaveApplicationRecord.applicant_id) == applicant_id)
    if status_filter is not None:
        filters.append(col(LeaveApplicationRecord.status) == status_filter.value)
    if year is not None:
        filters.append(extract("year", col(LeaveApplicationRecord.start_date)) == year)

    count_result = await session.execute(select(func.count()).select_from(LeaveApplicationRecord).where(*filters))
    total = count_result.scalar_one()

    result = await session.execute(
        select(LeaveApplicationRecord)
        .where(*filters)
        .order_by(col(LeaveApplicationRecord.start_date).desc(), col(LeaveApplicationRecord.created_at).desc())
        .offset(offset)
        .limit(limit)
    )
    items = [_build_application_response(record) for record in result.scalars().all()]
    return ApplicationListResponse(items=items, total=total)


# ---------------------------------------------------------------------------
# Approval workflow
# ---------------------------------------------------------------------------


async def submit_application(
    session: AsyncSession,
    auth: AuthContext,
    payload: SubmitApplicationPayload,
) -> ApplicationResponse:
    """Submit a leave application with its initial paid/LOP split.

    Flow:
    1. Verify the applicant exists.
    2. Count weekdays in the range (400 if none).
    3. Compute the start month's current ledger balance.
    4. Split total days into paid (up to that balance) and LOP.
    5. Store the application as pending, audit, commit.
    """
    from leave_ledger.services.accrual import load_year

    employee = await get_employee_service().get_employee(payload.applicant_id)
    if employee is None:
        raise NotFoundError("Employee not found")

    total_days = calendar_span.count_weekdays(payload.start_date, payload.end_date)
    if total_days <= 0:
        raise AppError("Leave range covers no working days", status_code=status.HTTP_400_BAD_REQUEST)

    _, entries = await load_year(session, payload.applicant_id, payload.start_date.year)
    start_month_balance = entries[payload.start_date.month - 1].balance
    split = paid_lop.split_for_submission(total_days, start_month_balance)

    record = LeaveApplicationRecord(
        applicant_id=payload.applicant_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        leave_type=payload.leave_type.value,
        reason=payload.reason,
        status=LeaveStatus.PENDING.value,
        total_days=total_days,
        paid_days=split.paid_days,
        lop_days=split.lop_days,
        submitted_at=datetime.now(UTC),
    )
    session.add(record)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=record.id,
        action=AuditAction.SUBMIT,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info(
        "Leave application %s submitted for %s: total=%d paid=%d lop=%d",
        record.id,
        record.applicant_id,
        record.total_days,
        record.paid_days,
        record.lop_days,
    )
    return _build_application_response(record)


async def approve_application(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
    payload: ApprovePayload,
) -> ApplicationResponse:
    """Approve a pending application, optionally re-splitting paid and LOP days.

    The split and the status change are committed in one transaction so the
    ledger never sees an approved application with a stale split.
    """
    record = await _get_application_or_404(session, application_id)
    _require_pending(record, "approve")

    before_dict = model_to_audit_dict(record)

    if payload.paid_days is not None:
        split = paid_lop.adjust(record.total_days, payload.paid_days)
        record.paid_days = split.paid_days
        record.lop_days = split.lop_days

    # Reject a stored split that the ledger could not consume.
    to_leave_application(record)

    record.status = LeaveStatus.APPROVED.value
    record.decided_at = datetime.now(UTC)
    record.decided_by = auth.user_id
    record.decision_note = payload.note

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=record.id,
        action=AuditAction.APPROVE,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info(
        "Leave application %s approved by %s: paid=%d lop=%d",
        record.id,
        auth.user_id,
        record.paid_days,
        record.lop_days,
    )
    return _build_application_response(record)


async def reject_application(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
    payload: RejectPayload,
) -> ApplicationResponse:
    """Reject a pending application."""
    record = await _get_application_or_404(session, application_id)
    _require_pending(record, "reject")

    before_dict = model_to_audit_dict(record)

    record.status = LeaveStatus.REJECTED.value
    record.decided_at = datetime.now(UTC)
    record.decided_by = auth.user_id
    record.decision_note = payload.note

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=record.id,
        action=AuditAction.REJECT,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info("Leave application %s rejected by %s", record.id, auth.user_id)
    return _build_application_response(record)


async def cancel_application(
    session: AsyncSession,
    auth: AuthContext,
    application_id: uuid.UUID,
) -> ApplicationResponse:
    """Cancel a pending application.

    The applicant or an admin can cancel. Other callers get a 404, as for reads.
    """
    record = await _get_application_or_404(session, application_id)
    if not auth.is_admin and record.applicant_id != auth.user_id:
        raise NotFoundError("Leave application not found")
    _require_pending(record, "cancel")

    before_dict = model_to_audit_dict(record)

    record.status = LeaveStatus.CANCELLED.value
    record.decided_at = datetime.now(UTC)
    record.decided_by = auth.user_id

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_APPLICATION,
        entity_id=record.id,
        action=AuditAction.CANCEL,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info("Leave application %s cancelled by %s", record.id, auth.user_id)
    return _build_application_response(record)
