from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from ...core.enums import Intent, SessionStatus
from ...core.exceptions import ValidationError
from ..model import AttendanceSession
from .base import TransitionResult, TransitionStrategy, WorkItemAction, closed_minutes


class StartPauseStrategy(TransitionStrategy):
    """ACTIVE -> PAUSED."""

    intent = Intent.START_PAUSE
    work_item_action = WorkItemAction.HOLD

    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        if session.status == SessionStatus.PAUSED:
            raise ValidationError("Tracking is already paused")
        if session.status == SessionStatus.ON_BREAK:
            raise ValidationError("End the break before pausing")
        if session.status != SessionStatus.ACTIVE:
            raise ValidationError("Tracking can only be paused while clocked in")

        nxt = replace(session, pause_start=now, pause_end=None)
        return TransitionResult(session=nxt, title="Tracking Paused", message="Your timer is paused.")


class EndPauseStrategy(TransitionStrategy):
    """PAUSED -> ACTIVE."""

    intent = Intent.END_PAUSE
    work_item_action = WorkItemAction.RESUME

    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        if not session.pause_open:
            raise ValidationError("Tracking is not paused")

        minutes = closed_minutes(session.pause_start, now)
        nxt = replace(
            session,
            pause_start=None,
            pause_end=now,
            total_pause_minutes=int(session.total_pause_minutes or 0) + minutes,
        )
        return TransitionResult(session=nxt, title="Tracking Resumed", message=f"Pause time: {minutes} minutes")
