from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...core.enums import Intent, SessionStatus
from ...core.exceptions import ValidationError
from ..model import AttendanceSession
from .base import TransitionResult, TransitionStrategy, WorkItemAction, closed_minutes


class StartBreakStrategy(TransitionStrategy):
    """ACTIVE -> ON_BREAK."""

    intent = Intent.START_BREAK
    work_item_action = WorkItemAction.HOLD

    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        if session.status == SessionStatus.ON_BREAK:
            raise ValidationError("A break is already in progress")
        if session.status == SessionStatus.PAUSED:
            raise ValidationError("End the pause before starting a break")
        if session.status != SessionStatus.ACTIVE:
            raise ValidationError("Breaks can only start while clocked in")

        nxt = replace(session, break_start=now, break_end=None)
        return TransitionResult(session=nxt, title="Break Started", message="Enjoy your break!")


class EndBreakStrategy(TransitionStrategy):
    """ON_BREAK -> ACTIVE."""

    intent = Intent.END_BREAK
    work_item_action = WorkItemAction.RESUME

    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        if not session.break_open:
            raise ValidationError("No break in progress")

        minutes = closed_minutes(session.break_start, now)
        nxt = replace(
            session,
            break_start=None,
            break_end=now,
            total_break_minutes=int(session.total_break_minutes or 0) + minutes,
        )
        return TransitionResult(session=nxt, title="Back to Work", message=f"Break time: {minutes} minutes")
