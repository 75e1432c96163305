"""Settings source: the process-wide leave accrual parameters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from leave_ledger.config import get_settings
from leave_ledger.models.base import now_utc
from leave_ledger.models.enums import AuditAction, AuditEntityType, OverrideDetection
from leave_ledger.models.settings import SETTINGS_ROW_ID, LeaveSettingsRecord
from leave_ledger.schemas.ledger import LeaveSettings
from leave_ledger.services.audit import model_to_audit_dict, write_audit_log

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from leave_ledger.schemas.auth import AuthContext
    from leave_ledger.schemas.settings import UpdateLeaveSettingsPayload

logger = logging.getLogger(__name__)


def default_leave_settings() -> LeaveSettings:
    """Leave settings from the environment, used until a settings row is stored."""
    config = get_settings()
    return LeaveSettings(
        monthly_credit=config.default_monthly_credit,
        max_carry_forward=config.default_max_carry_forward,
        max_leaves_per_month=config.default_max_leaves_per_month,
        override_detection=OverrideDetection(config.default_override_detection),
    )


def _to_leave_settings(record: LeaveSettingsRecord) -> LeaveSettings:
    return LeaveSettings(
        monthly_credit=record.monthly_credit,
        max_carry_forward=record.max_carry_forward,
        max_leaves_per_month=record.max_leaves_per_month,
        override_detection=OverrideDetection(record.override_detection),
    )


async def fetch_settings(session: AsyncSession) -> LeaveSettings:
    """Return the stored leave settings, falling back to the configured defaults."""
    record = await session.get(LeaveSettingsRecord, SETTINGS_ROW_ID)
    if record is None:
        return default_leave_settings()
    return _to_leave_settings(record)


async def update_leave_settings(
    session: AsyncSession,
    auth: AuthContext,
    payload: UpdateLeaveSettingsPayload,
) -> LeaveSettings:
    """Replace the stored leave settings and audit the change."""
    record = await session.get(LeaveSettingsRecord, SETTINGS_ROW_ID)
    before_dict = model_to_audit_dict(record) if record is not None else None

    if record is None:
        record = LeaveSettingsRecord(
            id=SETTINGS_ROW_ID,
            monthly_credit=payload.monthly_credit,
            max_carry_forward=payload.max_carry_forward,
            max_leaves_per_month=payload.max_leaves_per_month,
        )
        session.add(record)

    record.monthly_credit = payload.monthly_credit
    record.max_carry_forward = payload.max_carry_forward
    record.max_leaves_per_month = payload.max_leaves_per_month
    record.override_detection = payload.override_detection.value
    record.updated_by = auth.user_id
    record.updated_at = now_utc()

    await session.flush()

    await write_audit_log(
        session,
        actor_id=auth.user_id,
        entity_type=AuditEntityType.LEAVE_SETTINGS,
        entity_id=SETTINGS_ROW_ID,
        action=AuditAction.CREATE if before_dict is None else AuditAction.UPDATE,
        before_json=before_dict,
        after_json=model_to_audit_dict(record),
    )

    await session.commit()
    logger.info(
        "Leave settings updated by %s: credit=%d carry_cap=%d monthly_cap=%d detection=%s",
        auth.user_id,
        record.monthly_credit,
        record.max_carry_forward,
        record.max_leaves_per_month,
        record.override_detection,
    )
    return _to_leave_settings(record)
