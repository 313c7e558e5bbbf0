from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..attendance.accumulator import (
    MS_PER_HOUR,
    MS_PER_MINUTE,
    format_duration,
    net_worked_ms,
    range_hours,
    round_hours,
    session_worked_hours,
)
from ..attendance.model import AttendanceSession
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import end_of_day, now_local, start_of_day, start_of_month, start_of_week
from ..core.constants import DEFAULT_WEEKLY_TARGET_HOURS


@dataclass(frozen=True)
class BreakdownEntry:
    session_id: int
    work_date: str
    clock_in: str
    clock_out: Optional[str]
    clock_type: str
    break_minutes: int
    pause_minutes: int
    hours: Optional[float]


@dataclass(frozen=True)
class TimeBreakdown:
    entries: list[BreakdownEntry]
    today_hours: float
    week_hours: float
    today_display: str
    week_display: str
    weekly_target_percent: int


@dataclass(frozen=True)
class TeamMemberStatus:
    user_id: int
    session_id: int
    status: str
    last_action: Optional[datetime]


def _live_ms(sessions: Iterable[AttendanceSession], start: datetime, end: datetime, now: datetime) -> int:
    """Net time of every session clocked in during the range, open ones counted up to ``now``."""
    return sum(net_worked_ms(s, now) for s in sessions if start <= s.clock_in <= end)


def _display(ms: int) -> str:
    return format_duration(int(math.floor(ms / MS_PER_MINUTE + 0.5)))


def _board_status(s: AttendanceSession) -> str:
    if s.clock_out is not None:
        return "OUT"
    if s.pause_open:
        return "PAUSE"
    if s.break_open:
        return "BRS"
    return "IN"


def _last_action(s: AttendanceSession) -> Optional[datetime]:
    times = [t for t in (s.clock_out, s.pause_end, s.pause_start, s.break_end, s.break_start, s.clock_in) if t]
    return max(times) if times else None


class ReportService:
    """Daily/weekly/monthly rollups and the dashboard breakdowns."""

    def __init__(self, attendance: AttendanceRepository, *, weekly_target_hours: int = DEFAULT_WEEKLY_TARGET_HOURS):
        self._attendance = attendance
        self._weekly_target = int(weekly_target_hours)

    def get_daily_hours(self, user_id: int, *, now: datetime | None = None) -> float:
        now = now or now_local()
        return self._rollup(user_id, start_of_day(now), end_of_day(now), places=2)

    def get_weekly_hours(self, user_id: int, *, now: datetime | None = None) -> float:
        now = now or now_local()
        return self._rollup(user_id, start_of_week(now), end_of_day(now), places=2)

    def get_monthly_hours(self, user_id: int, *, now: datetime | None = None) -> float:
        now = now or now_local()
        return self._rollup(user_id, start_of_month(now), end_of_day(now), places=1)

    def _rollup(self, user_id: int, start: datetime, end: datetime, *, places: int) -> float:
        sessions = self._attendance.list_for_user_between(user_id=user_id, start=start, end=end)
        return round_hours(range_hours(sessions, start, end), places)

    def get_user_breakdown(self, user_id: int, *, now: datetime | None = None) -> TimeBreakdown:
        now = now or now_local()
        sessions = self._attendance.list_for_user_between(user_id=user_id, start=start_of_week(now), end=end_of_day(now))
        return self.get_time_breakdown(sessions, now=now)

    def get_time_breakdown(self, sessions: Sequence[AttendanceSession], *, now: datetime | None = None) -> TimeBreakdown:
        now = now or now_local()
        ordered = sorted(sessions, key=lambda s: s.clock_in, reverse=True)

        entries = []
        for s in ordered:
            hours = session_worked_hours(s)
            entries.append(
                BreakdownEntry(
                    session_id=s.session_id,
                    work_date=s.clock_in.strftime("%Y-%m-%d"),
                    clock_in=s.clock_in.strftime("%H:%M"),
                    clock_out=s.clock_out.strftime("%H:%M") if s.clock_out else None,
                    clock_type=s.clock_type.value,
                    break_minutes=int(s.total_break_minutes or 0),
                    pause_minutes=int(s.total_pause_minutes or 0),
                    hours=round_hours(hours, 2) if hours is not None else None,
                )
            )

        today_ms = _live_ms(ordered, start_of_day(now), end_of_day(now), now)
        week_ms = _live_ms(ordered, start_of_week(now), end_of_day(now), now)
        today = today_ms / MS_PER_HOUR
        week = week_ms / MS_PER_HOUR
        target_percent = 0
        if self._weekly_target > 0:
            target_percent = int(math.floor(week / self._weekly_target * 100 + 0.5))

        return TimeBreakdown(
            entries=entries,
            today_hours=round_hours(today, 2),
            week_hours=round_hours(week, 2),
            today_display=_display(today_ms),
            week_display=_display(week_ms),
            weekly_target_percent=target_percent,
        )

    def get_team_board(self, *, now: datetime | None = None) -> list[TeamMemberStatus]:
        now = now or now_local()
        latest: dict[int, AttendanceSession] = {}
        for s in self._attendance.list_between(start=start_of_day(now), end=end_of_day(now)):
            current = latest.get(s.user_id)
            if current is None or s.clock_in > current.clock_in:
                latest[s.user_id] = s

        board = [
            TeamMemberStatus(user_id=s.user_id, session_id=s.session_id, status=_board_status(s), last_action=_last_action(s))
            for s in latest.values()
        ]
        board.sort(key=lambda m: m.last_action or datetime.min, reverse=True)
        return board
