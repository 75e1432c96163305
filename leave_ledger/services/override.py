# ruff: noqa: TC003
"""Override store: administrator corrections to monthly carry-forward and credit."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import status
from sqlalchemy import select
from sqlmodel import col

from leave_ledger.exceptions import AppError, NotFoundError
from leave_ledger.models.adjustment import LeaveBalanceAdjustment
from leave_ledger.models.enums import AdjustmentType, AuditAction, AuditEntityType, EmployeeType
from leave_ledger.models.override import LeaveBalanceOverrideRecord
from leave_ledger.schemas.ledger import LeaveBalanceOverride
from leave_ledger.schemas.override import AdjustmentResponse, OverrideListResponse, OverrideResponse
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log
from leave_ledger.services.carry_forward import accepts_carry_in
from leave_ledger.services.employee import get_employee_service

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.auth import AuthContext
    from leave_ledger.schemas.override import CarriedLeaveAdjustmentPayload, UpsertOverridePayload

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure helpers
# ---------------------------------------------------------------------------


def apply_carried_adjustment(current: int, adjustment_type: AdjustmentType, amount: int) -> int:
    """Return the new carried_forward after a credit, debit or correction.

    Debits never take the value below zero; a correction sets it outright.
    """
    if adjustment_type == AdjustmentType.CREDIT:
        return current + amount
    if adjustment_type == AdjustmentType.DEBIT:
        return max(0, current - amount)
    return amount


def _build_override_response(record: LeaveBalanceOverrideRecord) -> OverrideResponse:
    """Map an override row to its response schema."""
    return OverrideResponse(
        id=record.id,
        employee_id=record.employee_id,
        employee_type=EmployeeType(record.employee_type),
        year=record.year,
        month=record.month,
        carried_forward=record.carried_forward,
        additional_credit=record.additional_credit,
        adjustment_reason=record.adjustment_reason,
        adjusted_at=record.adjusted_at,
        adjusted_by=record.adjusted_by,
    )


def _build_adjustment_response(adjustment: LeaveBalanceAdjustment) -> AdjustmentResponse:
    return AdjustmentResponse(
        id=adjustment.id,
        override_id=adjustment.override_id,
        employee_id=adjustment.employee_id,
        adjustment_type=AdjustmentType(adjustment.adjustment_type),
        previous_value=adjustment.previous_value,
        new_value=adjustment.new_value,
        adjustment_amount=adjustment.adjustment_amount,
        reason=adjustment.reason,
        adjusted_by=adjustment.adjusted_by,
        created_at=adjustment.created_at,
    )


# ---------------------------------------------------------------------------
# DB helpers
# ---------------------------------------------------------------------------


async def _get_override(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
    month: int,
) -> LeaveBalanceOverrideRecord | None:
    result = await session.execute(
        select(LeaveBalanceOverrideRecord).where(
            col(LeaveBalanceOverrideRecord.employee_id) == employee_id,
            col(LeaveBalanceOverrideRecord.year) == year,
            col(LeaveBalanceOverrideRecord.month) == month,
        )
    )
    return result.scalar_one_or_none()


async def _get_or_create_override(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
    month: int,
) -> tuple[LeaveBalanceOverrideRecord, bool]:
    """Return the month's override row, creating an empty one for a known employee.

    The second element is True when the row was created.
    """
    record = await _get_override(session, employee_id, year, month)
    if record is not None:
        return record, False

    employee = await get_employee_service().get_employee(employee_id)
    if employee is None:
        raise NotFoundError("Employee not found")

    record = LeaveBalanceOverrideRecord(
        employee_id=employee_id,
        employee_type=employee.employee_type.value,
        year=year,
        month=month,
    )
    session.add(record)
    return record, True


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def fetch_overrides(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> dict[int, LeaveBalanceOverride]:
    """Return month -> override for every stored override of the employee's year."""
    result = await session.execute(
        select(LeaveBalanceOverrideRecord).where(
            col(LeaveBalanceOverrideRecord.employee_id) == employee_id,
            col(LeaveBalanceOverrideRecord.year) == year,
        )
    )
    return {
        record.month: LeaveBalanceOverride(
            carried_forward=record.carried_forward,
            additional_credit=record.additional_credit,
            adjustment_reason=record.adjustment_reason,
            adjusted_at=record.adjusted_at,
        )
        for record in result.scalars().all()
    }


async def list_overrides(
    session: AsyncSession,
    employee_id: uuid.UUID,
    year: int,
) -> OverrideListResponse:
    """List the stored overrides of an employee's year, ordered by month."""
    result = await session.execute(
        select(LeaveBalanceOverrideRecord)
        .where(
            col(LeaveBalanceOverrideRecord.employee_id) == employee_id,
            col(LeaveBalanceOverrideRecord.year) == year,
        )
        .order_by(col(LeaveBalanceOverrideRecord.month))
    )
    items = [_build_override_response(record) for record in result.scalars().all()]
    return OverrideListResponse(items=items, total=len(items))


async def upsert_override(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    year: int,
    month: int,
    payload: UpsertOverridePayload,
) -> OverrideResponse:
    """Set one month's carried_forward and additional_credit, with a mandatory reason."""
    if not accepts_carry_in(month) and payload.carried_forward > 0:
        raise AppError(
            "January has no carry-forward; carried_forward must be 0",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        )

    record, created = await _get_or_create_override(session, employee_id, year, month)
    before_dict = None if created else model_to_audit_dict(record)

    record.carried_forward = payload.carried_forward
    record.additional_credit = payload.additional_credit
    record.adjustment_reason = payload.reason
    record.adjusted_at = datetime.now(UTC)
    record.adjusted_by = auth.user_id

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_OVERRIDE,
        entity_id=record.id,
        action=AuditAction.CREATE if created else AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info(
        "Leave override for %s %d-%02d set by %s: carried=%d additional=%d",
        employee_id,
        year,
        month,
        auth.user_id,
        record.carried_forward,
        record.additional_credit,
    )
    return _build_override_response(record)


async def adjust_carried_leave(
    session: AsyncSession,
    auth: AuthContext,
    employee_id: uuid.UUID,
    payload: CarriedLeaveAdjustmentPayload,
) -> AdjustmentResponse:
    """Credit, debit or correct one month's carried_forward and log the adjustment.

    The reason is stored on the override too, which marks the month as
    manually overridden.
    """
    record, created = await _get_or_create_override(session, employee_id, payload.year, payload.month)
    before_dict = None if created else model_to_audit_dict(record)

    previous_value = record.carried_forward
    new_value = apply_carried_adjustment(previous_value, payload.adjustment_type, payload.amount)

    record.carried_forward = new_value
    record.adjustment_reason = payload.reason
    record.adjusted_at = datetime.now(UTC)
    record.adjusted_by = auth.user_id
    await session.flush()

    adjustment = LeaveBalanceAdjustment(
        override_id=record.id,
        employee_id=employee_id,
        employee_type=record.employee_type,
        adjustment_type=payload.adjustment_type.value,
        previous_value=previous_value,
        new_value=new_value,
        adjustment_amount=(
            -payload.amount if payload.adjustment_type == AdjustmentType.DEBIT else new_value - previous_value
        ),
        reason=payload.reason,
        adjusted_by=auth.user_id,
    )
    session.add(adjustment)
    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_OVERRIDE,
        entity_id=record.id,
        action=AuditAction.ADJUST,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info(
        "Carried leave %s for %s %d-%02d: %d -> %d",
        payload.adjustment_type.value,
        employee_id,
        payload.year,
        payload.month,
        previous_value,
        new_value,
    )
    return _build_adjustment_response(adjustment)
