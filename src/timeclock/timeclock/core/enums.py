from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization checks."""

    ADMIN = "admin"
    STAFF = "staff"


class ClockType(str, Enum):
    """Which bucket the tracked time is booked against."""

    PAYROLL = "payroll"
    BILLABLE = "billable"


class SessionStatus(str, Enum):
    """Stored status of an attendance session (always derived from its intervals)."""

    ACTIVE = "active"
    ON_BREAK = "on_break"
    PAUSED = "paused"
    COMPLETED = "completed"


class ClockState(str, Enum):
    """Caller-facing state, including the 'no open session' state."""

    OUT = "out"
    ACTIVE = "active"
    ON_BREAK = "on_break"
    PAUSED = "paused"


class Intent(str, Enum):
    """Transitions a caller can request on an open session."""

    START_BREAK = "start_break"
    END_BREAK = "end_break"
    START_PAUSE = "start_pause"
    END_PAUSE = "end_pause"
    CLOCK_OUT = "clock_out"


class WorkItemStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"


class NotificationType(str, Enum):
    ATTENDANCE = "attendance"
