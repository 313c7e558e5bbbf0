from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...core.enums import Intent
from ...core.exceptions import ValidationError
from ..model import AttendanceSession
from .base import TransitionResult, TransitionStrategy, WorkItemAction, closed_minutes


class ClockOutStrategy(TransitionStrategy):
    """{ACTIVE, ON_BREAK, PAUSED} -> COMPLETED, closing any open break or pause first."""

    intent = Intent.CLOCK_OUT
    work_item_action = WorkItemAction.FINALIZE

    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        if not session.is_open:
            raise ValidationError("Session is already clocked out")

        nxt = session
        if nxt.break_open:
            nxt = replace(
                nxt,
                break_start=None,
                break_end=now,
                total_break_minutes=int(nxt.total_break_minutes or 0) + closed_minutes(nxt.break_start, now),
            )
        if nxt.pause_open:
            nxt = replace(
                nxt,
                pause_start=None,
                pause_end=now,
                total_pause_minutes=int(nxt.total_pause_minutes or 0) + closed_minutes(nxt.pause_start, now),
            )

        nxt = replace(nxt, clock_out=now, paused_work_item_id=None)
        return TransitionResult(session=nxt, title="Clocked Out", message="Your time has been recorded.")
