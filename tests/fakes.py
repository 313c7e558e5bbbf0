from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from src.timeclock.timeclock.attendance.model import AttendanceEditLog, AttendanceSession
from src.timeclock.timeclock.core.enums import ClockType, SessionStatus, WorkItemStatus
from src.timeclock.timeclock.core.exceptions import PersistenceError
from src.timeclock.timeclock.notifications.model import NotificationEvent
from src.timeclock.timeclock.work_items.model import WorkItem


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self.sessions: dict[int, AttendanceSession] = {}
        self.edit_logs: list[AttendanceEditLog] = []

    def add(self, session: AttendanceSession) -> AttendanceSession:
        self.sessions[session.session_id] = session
        self._next_id = max(self._next_id, session.session_id + 1)
        return session

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        return self.sessions.get(int(session_id))

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        open_sessions = [s for s in self.sessions.values() if s.user_id == user_id and s.clock_out is None]
        if not open_sessions:
            return None
        return max(open_sessions, key=lambda s: (s.clock_in, s.session_id))

    def list_open(self):
        return sorted((s for s in self.sessions.values() if s.clock_out is None), key=lambda s: s.clock_in)

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime):
        return [s for s in self.list_between(start=start, end=end) if s.user_id == user_id]

    def list_between(self, *, start: datetime, end: datetime):
        rows = [s for s in self.sessions.values() if start <= s.clock_in <= end]
        return sorted(rows, key=lambda s: s.clock_in, reverse=True)

    def create_session(self, *, user_id, clock_in, clock_type: ClockType, status: SessionStatus, location_name=None) -> int:
        sid = self._next_id
        self._next_id += 1
        self.sessions[sid] = AttendanceSession(
            session_id=sid,
            user_id=user_id,
            clock_in=clock_in,
            clock_type=clock_type,
            status=status,
            location_name=location_name,
        )
        return sid

    def save(self, session: AttendanceSession, *, expected_version: int) -> bool:
        stored = self.sessions.get(session.session_id)
        if stored is None or stored.version != expected_version:
            return False
        self.sessions[session.session_id] = replace(
            session, version=expected_version + 1, reminder_sent_at=stored.reminder_sent_at
        )
        return True

    def claim_reminder(self, *, session_id: int, sent_at: datetime) -> bool:
        stored = self.sessions.get(session_id)
        if stored is None or stored.reminder_sent_at is not None or stored.clock_out is not None:
            return False
        self.sessions[session_id] = replace(stored, reminder_sent_at=sent_at)
        return True

    def add_edit_log(self, log: AttendanceEditLog) -> int:
        self.edit_logs.append(log)
        return len(self.edit_logs)


class InMemoryWorkItems:
    def __init__(self, items=()):
        self.items: dict[int, WorkItem] = {i.work_item_id: i for i in items}
        self.failing_ids: set[int] = set()

    def get_by_id(self, work_item_id: int) -> Optional[WorkItem]:
        return self.items.get(work_item_id)

    def find_latest_open(self, *, user_id: int, status: WorkItemStatus) -> Optional[WorkItem]:
        matches = [
            i for i in self.items.values() if i.user_id == user_id and i.status == status and i.end_time is None
        ]
        if not matches:
            return None
        return max(matches, key=lambda i: (i.created_at or datetime.min, i.work_item_id))

    def list_open_for_user(self, *, user_id: int, statuses):
        statuses = set(statuses)
        return [
            i
            for i in sorted(self.items.values(), key=lambda i: i.work_item_id)
            if i.user_id == user_id and i.status in statuses and i.end_time is None
        ]

    def update(self, item: WorkItem, *, expected_status: WorkItemStatus) -> bool:
        if item.work_item_id in self.failing_ids:
            raise PersistenceError(f"work item {item.work_item_id} write failed")
        stored = self.items.get(item.work_item_id)
        if stored is None or stored.status != expected_status:
            return False
        self.items[item.work_item_id] = item
        return True


class RecordingNotifier:
    def __init__(self, *, fail: bool = False):
        self.notifications: list[NotificationEvent] = []
        self.alerts: list[NotificationEvent] = []
        self._fail = fail

    def create_notification(self, event: NotificationEvent) -> None:
        if self._fail:
            raise PersistenceError("notifications table unavailable")
        self.notifications.append(event)

    def push_alert(self, event: NotificationEvent) -> None:
        if self._fail:
            raise PersistenceError("alert transport unavailable")
        self.alerts.append(event)

    @property
    def titles(self) -> list[str]:
        return [e.title for e in self.notifications]
