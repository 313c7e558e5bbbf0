from __future__ import annotations

import logging
from datetime import datetime, timedelta

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_AUTO_CLOCK_OUT_HOURS
from ..core.exceptions import DomainError
from .repository import AttendanceRepository
from .service import AttendanceService

logger = logging.getLogger(__name__)


class AutoClockOutService:
    """Closes sessions left open longer than ``max_hours`` after clock-in."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        service: AttendanceService,
        *,
        max_hours: int = DEFAULT_AUTO_CLOCK_OUT_HOURS,
    ):
        self._attendance = attendance
        self._service = service
        self._max_hours = int(max_hours)

    def run(self, *, now: datetime | None = None) -> int:
        now = now or now_local()
        cutoff = now - timedelta(hours=self._max_hours)

        closed = 0
        for session in self._attendance.list_open():
            if session.clock_in > cutoff:
                continue
            try:
                self._service.clock_out_session(session, now=now)
                closed += 1
            except DomainError:
                logger.exception("auto clock-out failed for session %s", session.session_id)

        logger.info("auto clock-out closed %d session(s)", closed)
        return closed
