from __future__ import annotations

from datetime import timedelta

from src.timeclock.timeclock.attendance.auto_clock_out import AutoClockOutService
from src.timeclock.timeclock.core.enums import SessionStatus


def test_closes_only_sessions_past_the_limit(service, attendance_repo, fixed_now):
    stale = service.clock_in(1, now=fixed_now)
    fresh = service.clock_in(2, now=fixed_now + timedelta(hours=3))

    sweep_at = fixed_now + timedelta(hours=8, minutes=5)
    closed = AutoClockOutService(attendance_repo, service, max_hours=8).run(now=sweep_at)

    assert closed == 1
    assert attendance_repo.get_by_id(stale.session_id).status == SessionStatus.COMPLETED
    assert attendance_repo.get_by_id(stale.session_id).clock_out == sweep_at
    assert attendance_repo.get_by_id(fresh.session_id).clock_out is None


def test_auto_clock_out_closes_open_break(service, attendance_repo, fixed_now):
    session = service.clock_in(1, now=fixed_now)
    service.start_break(1, now=fixed_now + timedelta(hours=7))

    AutoClockOutService(attendance_repo, service, max_hours=8).run(now=fixed_now + timedelta(hours=9))

    stored = attendance_repo.get_by_id(session.session_id)
    assert stored.break_start is None
    assert stored.total_break_minutes == 120


def test_nothing_to_close(service, attendance_repo, fixed_now):
    assert AutoClockOutService(attendance_repo, service).run(now=fixed_now) == 0
