from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import ClockType, SessionStatus
from .model import AttendanceEditLog, AttendanceSession


class AttendanceRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        """Most recent session of the user with ``clock_out`` still null."""

        raise NotImplementedError

    def list_open(self) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def create_session(
        self,
        *,
        user_id: int,
        clock_in: datetime,
        clock_type: ClockType,
        status: SessionStatus,
        location_name: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def save(self, session: AttendanceSession, *, expected_version: int) -> bool:
        """Write every mutable field if the stored row is still at ``expected_version``.

        Returns False when another writer got there first. Never writes
        ``reminder_sent_at``.
        """

        raise NotImplementedError

    def claim_reminder(self, *, session_id: int, sent_at: datetime) -> bool:
        """Set ``reminder_sent_at`` only if it is unset; True if this call set it."""

        raise NotImplementedError

    def add_edit_log(self, log: AttendanceEditLog) -> int:
        raise NotImplementedError
