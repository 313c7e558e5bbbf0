from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ClockType, SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceEditLog, AttendanceSession
from .repository import AttendanceRepository

_COLUMNS = """
    session_id, user_id, clock_in, clock_out, clock_type,
    break_start, break_end, total_break_minutes,
    pause_start, pause_end, total_pause_minutes,
    status, location_name, paused_work_item_id, reminder_sent_at, version, is_edited
"""


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    paused_item = r.get("paused_work_item_id")
    return AttendanceSession(
        session_id=int(r["session_id"]),
        user_id=int(r["user_id"]),
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        clock_type=ClockType(r.get("clock_type") or ClockType.PAYROLL.value),
        break_start=r.get("break_start"),
        break_end=r.get("break_end"),
        total_break_minutes=int(r.get("total_break_minutes") or 0),
        pause_start=r.get("pause_start"),
        pause_end=r.get("pause_end"),
        total_pause_minutes=int(r.get("total_pause_minutes") or 0),
        status=SessionStatus(r["status"]),
        location_name=r.get("location_name"),
        paused_work_item_id=int(paused_item) if paused_item is not None else None,
        reminder_sent_at=r.get("reminder_sent_at"),
        version=int(r.get("version") or 0),
        is_edited=bool(r.get("is_edited")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_sessions WHERE session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _to_session(r) if r else None

    def get_open_for_user(self, user_id: int) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND clock_out IS NULL
                ORDER BY clock_in DESC, session_id DESC
                LIMIT 1
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            return _to_session(r) if r else None

    def list_open(self) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE clock_out IS NULL
                ORDER BY clock_in ASC
                """
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_for_user_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE user_id=%s AND clock_in BETWEEN %s AND %s
                ORDER BY clock_in DESC
                """,
                (int(user_id), start, end),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def list_between(self, *, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_sessions
                WHERE clock_in BETWEEN %s AND %s
                ORDER BY clock_in DESC
                """,
                (start, end),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create_session(
        self,
        *,
        user_id: int,
        clock_in: datetime,
        clock_type: ClockType,
        status: SessionStatus,
        location_name: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(user_id, clock_in, clock_type, status, location_name)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), clock_in, clock_type.value, status.value, location_name),
            )
            return int(cur.lastrowid)

    def save(self, session: AttendanceSession, *, expected_version: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET clock_in=%s, clock_out=%s, clock_type=%s,
                    break_start=%s, break_end=%s, total_break_minutes=%s,
                    pause_start=%s, pause_end=%s, total_pause_minutes=%s,
                    status=%s, location_name=%s, paused_work_item_id=%s, is_edited=%s,
                    version=version+1
                WHERE session_id=%s AND version=%s
                """,
                (
                    session.clock_in,
                    session.clock_out,
                    session.clock_type.value,
                    session.break_start,
                    session.break_end,
                    int(session.total_break_minutes),
                    session.pause_start,
                    session.pause_end,
                    int(session.total_pause_minutes),
                    session.status.value,
                    session.location_name,
                    session.paused_work_item_id,
                    1 if session.is_edited else 0,
                    int(session.session_id),
                    int(expected_version),
                ),
            )
            return cur.rowcount > 0

    def claim_reminder(self, *, session_id: int, sent_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_sessions
                SET reminder_sent_at=%s
                WHERE session_id=%s AND reminder_sent_at IS NULL AND clock_out IS NULL
                """,
                (sent_at, int(session_id)),
            )
            return cur.rowcount > 0

    def add_edit_log(self, log: AttendanceEditLog) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_edit_logs(session_id, edited_by, old_values, new_values, reason)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (
                    int(log.session_id),
                    int(log.edited_by),
                    json.dumps(log.old_values, default=str),
                    json.dumps(log.new_values, default=str),
                    log.reason,
                ),
            )
            return int(cur.lastrowid)
