"""Net worked time over a session's open and closed intervals.

Everything here is pure: same sessions and ``now`` in, same numbers out.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ..common.datetime_utils import elapsed_ms
from ..core.enums import SessionStatus
from .model import AttendanceSession

MS_PER_MINUTE = 60_000
MS_PER_HOUR = 3_600_000


def net_worked_ms(session: AttendanceSession, now: datetime) -> int:
    """Elapsed time since clock-in minus closed and currently-open break/pause time, never negative."""
    end = session.clock_out or now
    elapsed = elapsed_ms(session.clock_in, end)
    elapsed -= int(session.total_pause_minutes or 0) * MS_PER_MINUTE
    elapsed -= int(session.total_break_minutes or 0) * MS_PER_MINUTE

    if session.status == SessionStatus.PAUSED and session.pause_start is not None:
        elapsed -= elapsed_ms(session.pause_start, end)
    if session.status == SessionStatus.ON_BREAK and session.break_start is not None:
        elapsed -= elapsed_ms(session.break_start, end)

    return max(0, elapsed)


def net_worked_minutes(session: AttendanceSession, now: datetime) -> int:
    return net_worked_ms(session, now) // MS_PER_MINUTE


def session_worked_hours(session: AttendanceSession) -> Optional[float]:
    """Hours of a completed session (None while it is still open)."""
    if session.clock_out is None:
        return None
    deducted = (int(session.total_break_minutes or 0) + int(session.total_pause_minutes or 0)) * MS_PER_MINUTE
    worked = max(0, elapsed_ms(session.clock_in, session.clock_out) - deducted)
    return worked / MS_PER_HOUR


def range_hours(sessions: Iterable[AttendanceSession], range_start: datetime, range_end: datetime) -> float:
    """Sum of completed-session hours whose clock-in falls in ``[range_start, range_end]``."""
    total = 0.0
    for s in sessions:
        if s.clock_out is None:
            continue
        if not (range_start <= s.clock_in <= range_end):
            continue
        total += session_worked_hours(s) or 0.0
    return total


def round_hours(value: float, places: int) -> float:
    """Round half-up to ``places`` decimals, matching the dashboard's fixed-point display."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def format_elapsed(ms: int) -> str:
    """Live timer text, e.g. ``07:49:05``."""
    ms = max(0, int(ms))
    hours = ms // MS_PER_HOUR
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (ms % MS_PER_MINUTE) // 1000
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def format_duration(total_minutes: int) -> str:
    """Human readable duration: ``2h 30m``, ``45m``, ``3h``."""
    if not total_minutes or total_minutes <= 0:
        return "0m"
    hours, minutes = divmod(int(total_minutes), 60)
    if hours == 0:
        return f"{minutes}m"
    if minutes == 0:
        return f"{hours}h"
    return f"{hours}h {minutes}m"
