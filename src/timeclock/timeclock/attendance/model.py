from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Optional

from ..core.enums import ClockType, SessionStatus


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one clock-in to clock-out attendance record.

    ``status`` is stored for querying but must always equal ``derive_status(self)``;
    ``with_derived_status`` is the only way the service produces a new row.
    """

    session_id: int
    user_id: int
    clock_in: datetime
    clock_type: ClockType = ClockType.PAYROLL
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    total_break_minutes: int = 0
    pause_start: Optional[datetime] = None
    pause_end: Optional[datetime] = None
    total_pause_minutes: int = 0
    status: SessionStatus = SessionStatus.ACTIVE
    location_name: Optional[str] = None
    paused_work_item_id: Optional[int] = None
    reminder_sent_at: Optional[datetime] = None
    version: int = 0
    is_edited: bool = False

    @property
    def is_open(self) -> bool:
        return self.clock_out is None

    @property
    def break_open(self) -> bool:
        return self.break_start is not None and self.break_end is None

    @property
    def pause_open(self) -> bool:
        return self.pause_start is not None and self.pause_end is None


def derive_status(session: AttendanceSession) -> SessionStatus:
    if session.clock_out is not None:
        return SessionStatus.COMPLETED
    if session.pause_open:
        return SessionStatus.PAUSED
    if session.break_open:
        return SessionStatus.ON_BREAK
    return SessionStatus.ACTIVE


def with_derived_status(session: AttendanceSession) -> AttendanceSession:
    return replace(session, status=derive_status(session))


@dataclass(frozen=True)
class SessionEdit:
    """Admin-supplied interval values for a retroactive edit."""

    clock_in: datetime
    clock_out: Optional[datetime] = None
    break_start: Optional[datetime] = None
    break_end: Optional[datetime] = None
    pause_start: Optional[datetime] = None
    pause_end: Optional[datetime] = None


@dataclass(frozen=True)
class AttendanceEditLog:
    """Audit row written for every admin edit."""

    session_id: int
    edited_by: int
    reason: str
    old_values: dict[str, Any] = field(default_factory=dict)
    new_values: dict[str, Any] = field(default_factory=dict)
    edit_id: Optional[int] = None
    created_at: Optional[datetime] = None
