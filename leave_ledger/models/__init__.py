from sqlmodel import SQLModel

from leave_ledger.models.adjustment import LeaveBalanceAdjustment
from leave_ledger.models.application import LeaveApplicationRecord
from leave_ledger.models.audit import AuditLog
from leave_ledger.models.base import TimestampMixin, UUIDBase
from leave_ledger.models.enums import (
    AdjustmentType,
    AuditAction,
    AuditEntityType,
    EmployeeType,
    LeaveCategory,
    LeaveStatus,
    LeaveType,
    OverrideDetection,
)
from leave_ledger.models.override import LeaveBalanceOverrideRecord
from leave_ledger.models.settings import LeaveSettingsRecord

__all__ = [
    "AdjustmentType",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "EmployeeType",
    "LeaveApplicationRecord",
    "LeaveBalanceAdjustment",
    "LeaveBalanceOverrideRecord",
    "LeaveCategory",
    "LeaveSettingsRecord",
    "LeaveStatus",
    "LeaveType",
    "OverrideDetection",
    "SQLModel",
    "TimestampMixin",
    "UUIDBase",
]
