from __future__ import annotations

import logging
from contextlib import nullcontext
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Callable, ContextManager, Optional

from ..common.datetime_utils import now_local, round_minutes
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_WORK_LOCATION
from ..core.enums import ClockState, ClockType, Intent, Role, SessionStatus
from ..core.exceptions import AuthorizationError, ConcurrencyError, DomainError, ValidationError
from ..notifications.model import NotificationEvent
from ..notifications.repository import Notifier
from ..work_items.coordinator import WorkItemCoordinator
from .accumulator import format_elapsed, net_worked_ms
from .factory import TransitionFactory
from .model import AttendanceEditLog, AttendanceSession, SessionEdit, with_derived_status
from .repository import AttendanceRepository
from .strategies.base import WorkItemAction

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStatusView:
    state: ClockState
    session: Optional[AttendanceSession]
    net_worked_ms: int
    elapsed: str


def resolve_location_name(coordinates: Optional[tuple[float, float]], work_location: Optional[str]) -> str:
    """Coordinates when the client captured them, otherwise the coarse work-location label."""
    if coordinates is not None:
        lat, lng = coordinates
        return f"{lat:.4f}, {lng:.4f}"
    label = work_location.strip() if isinstance(work_location, str) else ""
    return label or DEFAULT_WORK_LOCATION


def _interval_minutes(start: Optional[datetime], end: Optional[datetime]) -> int:
    if start is None or end is None:
        return 0
    return max(0, round_minutes(end - start))


def _snapshot(session: AttendanceSession) -> dict[str, Any]:
    def iso(value: Optional[datetime]) -> Optional[str]:
        return value.isoformat() if value else None

    return {
        "clock_in": iso(session.clock_in),
        "clock_out": iso(session.clock_out),
        "break_start": iso(session.break_start),
        "break_end": iso(session.break_end),
        "total_break_minutes": session.total_break_minutes,
        "pause_start": iso(session.pause_start),
        "pause_end": iso(session.pause_end),
        "total_pause_minutes": session.total_pause_minutes,
    }


class AttendanceService:
    """Owns the attendance session state machine.

    Every transition goes through ``_run``: the strategy computes the next row,
    the linked work item is held/resumed in the same transaction, and the row is
    written only if nobody else wrote it since it was read.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        coordinator: WorkItemCoordinator,
        notifier: Notifier,
        *,
        factory: TransitionFactory | None = None,
        transaction: Callable[[], ContextManager[Any]] | None = None,
        allow_concurrent_sessions: bool = False,
    ):
        self._attendance = attendance
        self._coordinator = coordinator
        self._notifier = notifier
        self._factory = factory or TransitionFactory()
        self._transaction = transaction or nullcontext
        self._allow_concurrent = bool(allow_concurrent_sessions)

    def clock_in(
        self,
        user_id: int,
        clock_type: ClockType | str = ClockType.PAYROLL,
        *,
        work_location: Optional[str] = DEFAULT_WORK_LOCATION,
        coordinates: Optional[tuple[float, float]] = None,
        now: datetime | None = None,
    ) -> AttendanceSession:
        now = now or now_local()
        try:
            ct = ClockType(clock_type)
        except ValueError:
            raise ValidationError(f"Unknown clock type: {clock_type!r}")

        if not self._allow_concurrent and self._attendance.get_open_for_user(user_id) is not None:
            raise ValidationError("You are already clocked in. Clock out before clocking in again")

        location = resolve_location_name(coordinates, work_location)
        session_id = self._attendance.create_session(
            user_id=user_id,
            clock_in=now,
            clock_type=ct,
            status=SessionStatus.ACTIVE,
            location_name=location,
        )
        session = AttendanceSession(
            session_id=session_id,
            user_id=user_id,
            clock_in=now,
            clock_type=ct,
            status=SessionStatus.ACTIVE,
            location_name=location,
        )
        self._notify(NotificationEvent(user_id=user_id, title="Clocked In", message=f"You are now tracking {ct.value} time."))
        return session

    def start_break(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        return self.apply(user_id, Intent.START_BREAK, now=now)

    def end_break(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        return self.apply(user_id, Intent.END_BREAK, now=now)

    def start_pause(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        return self.apply(user_id, Intent.START_PAUSE, now=now)

    def end_pause(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        return self.apply(user_id, Intent.END_PAUSE, now=now)

    def clock_out(self, user_id: int, *, now: datetime | None = None) -> AttendanceSession:
        return self.apply(user_id, Intent.CLOCK_OUT, now=now)

    def apply(self, user_id: int, intent: Intent | str, *, now: datetime | None = None) -> AttendanceSession:
        session = self._attendance.get_open_for_user(user_id)
        if session is None:
            raise ValidationError("You are not clocked in")
        return self._run(session, intent, now=now or now_local())

    def clock_out_session(self, session: AttendanceSession, *, now: datetime | None = None) -> AttendanceSession:
        """Clock out a specific session (used by the auto clock-out sweep)."""
        return self._run(session, Intent.CLOCK_OUT, now=now or now_local())

    def get_status(self, user_id: int, *, now: datetime | None = None) -> SessionStatusView:
        now = now or now_local()
        session = self._attendance.get_open_for_user(user_id)
        if session is None:
            return SessionStatusView(state=ClockState.OUT, session=None, net_worked_ms=0, elapsed=format_elapsed(0))

        ms = net_worked_ms(session, now)
        return SessionStatusView(
            state=ClockState(session.status.value),
            session=session,
            net_worked_ms=ms,
            elapsed=format_elapsed(ms),
        )

    def admin_edit_session(
        self,
        *,
        current_role: Role,
        editor_id: int,
        session_id: int,
        changes: SessionEdit,
        reason: str,
        now: datetime | None = None,
    ) -> AttendanceSession:
        now = now or now_local()
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can edit attendance records")
        reason = require_non_empty(reason, "Reason")

        session = self._attendance.get_by_id(session_id)
        if session is None:
            raise ValidationError("Attendance record not found")
        if changes.clock_out is not None and changes.clock_out < changes.clock_in:
            raise ValidationError("Clock out must be after clock in")

        edited = replace(
            session,
            clock_in=changes.clock_in,
            clock_out=changes.clock_out,
            break_start=changes.break_start,
            break_end=changes.break_end,
            total_break_minutes=_interval_minutes(changes.break_start, changes.break_end),
            pause_start=changes.pause_start,
            pause_end=changes.pause_end,
            total_pause_minutes=_interval_minutes(changes.pause_start, changes.pause_end),
            is_edited=True,
        )
        if edited.clock_out is None and edited.break_open and edited.pause_open:
            raise ValidationError("A session cannot be on break and paused at the same time")
        if edited.clock_out is None and not self._allow_concurrent:
            current = self._attendance.get_open_for_user(session.user_id)
            if current is not None and current.session_id != session.session_id:
                raise ValidationError("User already has an open session; clock it out before reopening this one")

        # a work item stays held only while the break or pause that held it is open
        held_before = session.is_open and (session.break_open or session.pause_open)
        held_after = edited.is_open and (edited.break_open or edited.pause_open)
        release_item = session.paused_work_item_id if held_before and not held_after else None
        if release_item is not None:
            edited = replace(edited, paused_work_item_id=None)
        edited = with_derived_status(edited)

        with self._transaction():
            if release_item is not None and edited.is_open:
                resume_at = (edited.pause_end if session.pause_open else edited.break_end) or now
                self._coordinator.on_resume(release_item, resume_at)
            if not self._attendance.save(edited, expected_version=session.version):
                raise ConcurrencyError("Attendance record was changed by another request; reload and try again")
            self._attendance.add_edit_log(
                AttendanceEditLog(
                    session_id=session.session_id,
                    edited_by=int(editor_id),
                    reason=reason,
                    old_values=_snapshot(session),
                    new_values=_snapshot(edited),
                )
            )

        if session.is_open and not edited.is_open:
            completed = self._coordinator.on_clock_out(session.user_id, edited.clock_out)
            if completed:
                logger.info("edit of session %s completed work items %s", session.session_id, completed)

        logger.info("attendance session %s edited by %s", session.session_id, editor_id)
        return replace(edited, version=session.version + 1)

    def _run(self, session: AttendanceSession, intent: Intent | str, *, now: datetime) -> AttendanceSession:
        strategy = self._factory.for_intent(intent)
        result = strategy.apply(session, now=now)
        nxt = result.session

        with self._transaction():
            if strategy.work_item_action == WorkItemAction.HOLD:
                nxt = replace(nxt, paused_work_item_id=self._coordinator.on_hold(session.user_id, now))
            elif strategy.work_item_action == WorkItemAction.RESUME:
                self._coordinator.on_resume(session.paused_work_item_id, now)
                nxt = replace(nxt, paused_work_item_id=None)

            nxt = with_derived_status(nxt)
            if not self._attendance.save(nxt, expected_version=session.version):
                raise ConcurrencyError("Attendance session was changed by another request; refresh and try again")

        if strategy.work_item_action == WorkItemAction.FINALIZE:
            completed = self._coordinator.on_clock_out(session.user_id, now)
            if completed:
                logger.info("clock-out of session %s completed work items %s", session.session_id, completed)

        self._notify(NotificationEvent(user_id=session.user_id, title=result.title, message=result.message))
        return replace(nxt, version=session.version + 1)

    def _notify(self, event: NotificationEvent) -> None:
        try:
            self._notifier.create_notification(event)
        except DomainError:
            logger.exception("failed to record notification %r for user %s", event.title, event.user_id)
