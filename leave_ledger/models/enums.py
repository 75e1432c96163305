from __future__ import annotations

import enum


class LeaveType(enum.StrEnum):
    """Leave type tag chosen by the applicant."""

    SICK = "sick"
    CASUAL = "casual"
    EARNED = "earned"


class LeaveCategory(enum.StrEnum):
    """Leave types whose weekdays are counted against the monthly balance."""

    SICK = "sick"
    CASUAL = "casual"


class LeaveStatus(enum.StrEnum):
    """State machine for leave applications."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class EmployeeType(enum.StrEnum):
    """Kind of employee a leave balance belongs to."""

    OFFICER = "officer"
    STAFF = "staff"


class OverrideDetection(enum.StrEnum):
    """Rule deciding whether a stored override row suppresses automatic carry-forward.

    HEURISTIC: the row counts only if carried_forward > 0 or a reason is set.
    EXPLICIT: every stored row counts, including zero-value rows.
    """

    HEURISTIC = "heuristic"
    EXPLICIT = "explicit"


class AdjustmentType(enum.StrEnum):
    """How a carried-leave adjustment changes the stored carried_forward."""

    CREDIT = "credit"
    DEBIT = "debit"
    CORRECTION = "correction"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    LEAVE_APPLICATION = "LEAVE_APPLICATION"
    LEAVE_OVERRIDE = "LEAVE_OVERRIDE"
    LEAVE_SETTINGS = "LEAVE_SETTINGS"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    SUBMIT = "SUBMIT"
    APPROVE = "APPROVE"
    REJECT = "REJECT"
    CANCEL = "CANCEL"
    ADJUST = "ADJUST"
