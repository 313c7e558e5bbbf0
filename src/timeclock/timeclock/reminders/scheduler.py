from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from ..attendance.accumulator import format_duration, net_worked_minutes
from ..attendance.model import derive_status
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_REMINDER_INTERVAL_SECONDS, DEFAULT_REMINDER_THRESHOLD_MINUTES
from ..core.enums import SessionStatus
from ..core.exceptions import DomainError
from ..notifications.model import NotificationEvent
from ..notifications.repository import Notifier

logger = logging.getLogger(__name__)


class ThresholdReminderScheduler:
    """Fires one reminder per session once net worked time reaches the threshold.

    The "already reminded" flag is the session's ``reminder_sent_at`` column,
    claimed with a conditional update, so restarts and several running
    instances still fire at most once.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        notifier: Notifier,
        *,
        threshold_minutes: int = DEFAULT_REMINDER_THRESHOLD_MINUTES,
    ):
        self._attendance = attendance
        self._notifier = notifier
        self._threshold = int(threshold_minutes)

    def tick(self, *, now: datetime | None = None) -> list[int]:
        now = now or now_local()
        fired: list[int] = []

        for session in self._attendance.list_open():
            if session.reminder_sent_at is not None:
                continue
            if derive_status(session) != SessionStatus.ACTIVE:
                continue

            minutes = net_worked_minutes(session, now)
            if minutes < self._threshold:
                continue
            if not self._attendance.claim_reminder(session_id=session.session_id, sent_at=now):
                continue

            self._emit(
                NotificationEvent(
                    user_id=session.user_id,
                    title="Almost at 8 hours",
                    message=f"You have worked {format_duration(minutes)} so far. Remember to clock out on time.",
                )
            )
            fired.append(session.session_id)

        return fired

    def _emit(self, event: NotificationEvent) -> None:
        try:
            self._notifier.push_alert(event)
        except DomainError:
            logger.exception("failed to push reminder alert to user %s", event.user_id)
        try:
            self._notifier.create_notification(event)
        except DomainError:
            logger.exception("failed to record reminder notification for user %s", event.user_id)


class ReminderLoop:
    """Background thread calling ``scheduler.tick`` every ``interval_seconds``."""

    def __init__(
        self,
        scheduler: ThresholdReminderScheduler,
        *,
        interval_seconds: float = DEFAULT_REMINDER_INTERVAL_SECONDS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._scheduler = scheduler
        self._interval = float(interval_seconds)
        self._clock = clock
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="timeclock-reminders", daemon=True)
        self._thread.start()
        logger.info("reminder loop started (every %ss)", self._interval)

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self._thread = None

    def run_once(self) -> list[int]:
        try:
            fired = self._scheduler.tick(now=self._clock())
        except DomainError:
            logger.exception("reminder tick failed")
            return []
        if fired:
            logger.info("sent work-time reminders for sessions %s", fired)
        return fired

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                self.run_once()
            except Exception:
                logger.exception("reminder loop pass failed")
            self._stop.wait(self._interval)
