from __future__ import annotations

from datetime import datetime

from src.timeclock.timeclock.attendance.model import AttendanceSession
from src.timeclock.timeclock.core.enums import ClockType, SessionStatus
from src.timeclock.timeclock.reports.service import ReportService

from fakes import InMemoryAttendance

NOW = datetime(2026, 3, 4, 15, 0)  # Wednesday


def _session(session_id, user_id, clock_in, clock_out=None, **kwargs):
    status = SessionStatus.COMPLETED if clock_out else kwargs.pop("status", SessionStatus.ACTIVE)
    return AttendanceSession(
        session_id=session_id, user_id=user_id, clock_in=clock_in, clock_out=clock_out, status=status, **kwargs
    )


def _repo():
    repo = InMemoryAttendance()
    repo.add(_session(1, 7, datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 17, 0), total_break_minutes=30))
    repo.add(_session(2, 7, datetime(2026, 3, 4, 9, 0), datetime(2026, 3, 4, 12, 0), clock_type=ClockType.BILLABLE))
    repo.add(_session(3, 7, datetime(2026, 3, 4, 13, 0)))
    repo.add(_session(4, 7, datetime(2026, 2, 27, 9, 0), datetime(2026, 2, 27, 17, 0)))
    repo.add(_session(5, 8, datetime(2026, 3, 4, 7, 0), datetime(2026, 3, 4, 11, 0)))
    repo.add(
        _session(
            6,
            9,
            datetime(2026, 3, 4, 10, 0),
            pause_start=datetime(2026, 3, 4, 14, 0),
            status=SessionStatus.PAUSED,
        )
    )
    return repo


def test_rollups_count_completed_sessions_only():
    svc = ReportService(_repo())

    assert svc.get_daily_hours(7, now=NOW) == 3.0
    assert svc.get_weekly_hours(7, now=NOW) == 10.5
    assert svc.get_monthly_hours(7, now=NOW) == 10.5


def test_monthly_hours_round_to_one_decimal():
    repo = InMemoryAttendance()
    repo.add(_session(1, 7, datetime(2026, 3, 2, 9, 0), datetime(2026, 3, 2, 9, 20)))

    # 20 minutes = 0.333.. hours
    assert ReportService(repo).get_monthly_hours(7, now=NOW) == 0.3
    assert ReportService(repo).get_weekly_hours(7, now=NOW) == 0.33


def test_breakdown_includes_live_session():
    breakdown = ReportService(_repo(), weekly_target_hours=40).get_user_breakdown(7, now=NOW)

    assert breakdown.today_hours == 5.0
    assert breakdown.week_hours == 12.5
    assert breakdown.today_display == "5h"
    assert breakdown.week_display == "12h 30m"
    assert breakdown.weekly_target_percent == 31

    assert [e.session_id for e in breakdown.entries] == [3, 2, 1]
    assert breakdown.entries[0].hours is None
    assert breakdown.entries[0].clock_out is None
    assert breakdown.entries[1].clock_type == "billable"
    assert breakdown.entries[2].hours == 7.5
    assert breakdown.entries[2].break_minutes == 30


def test_team_board_shows_latest_session_per_user():
    board = ReportService(_repo()).get_team_board(now=NOW)

    assert [(m.user_id, m.status) for m in board] == [(9, "PAUSE"), (7, "IN"), (8, "OUT")]
    assert board[1].session_id == 3
    assert board[0].last_action == datetime(2026, 3, 4, 14, 0)


def test_display_rounds_half_minutes_up():
    repo = InMemoryAttendance()
    repo.add(_session(1, 7, datetime(2026, 3, 4, 9, 0, 0), datetime(2026, 3, 4, 9, 2, 30)))
    repo.add(_session(2, 7, datetime(2026, 3, 2, 9, 0, 0), datetime(2026, 3, 2, 9, 2, 0)))

    breakdown = ReportService(repo).get_user_breakdown(7, now=NOW)

    assert breakdown.today_display == "3m"
    assert breakdown.week_display == "5m"
