from datetime import datetime

import pytest

from src.timeclock.timeclock.attendance.factory import TransitionFactory
from src.timeclock.timeclock.attendance.model import AttendanceSession
from src.timeclock.timeclock.attendance.strategies.base import WorkItemAction
from src.timeclock.timeclock.attendance.strategies.break_strategy import EndBreakStrategy, StartBreakStrategy
from src.timeclock.timeclock.attendance.strategies.clock_out_strategy import ClockOutStrategy
from src.timeclock.timeclock.attendance.strategies.pause_strategy import StartPauseStrategy
from src.timeclock.timeclock.core.enums import Intent, SessionStatus
from src.timeclock.timeclock.core.exceptions import ValidationError


def test_factory_maps_each_intent_to_its_strategy():
    factory = TransitionFactory()

    assert isinstance(factory.for_intent(Intent.START_BREAK), StartBreakStrategy)
    assert isinstance(factory.for_intent("end_break"), EndBreakStrategy)
    assert isinstance(factory.for_intent("start_pause"), StartPauseStrategy)
    assert isinstance(factory.for_intent(Intent.CLOCK_OUT), ClockOutStrategy)


def test_factory_rejects_unknown_intent():
    with pytest.raises(ValidationError):
        TransitionFactory().for_intent("teleport")


def test_factory_rejects_intent_without_strategy():
    factory = TransitionFactory(strategies={})
    with pytest.raises(ValidationError):
        factory.for_intent(Intent.CLOCK_OUT)


def test_work_item_actions():
    factory = TransitionFactory()
    assert factory.for_intent(Intent.START_PAUSE).work_item_action == WorkItemAction.HOLD
    assert factory.for_intent(Intent.END_PAUSE).work_item_action == WorkItemAction.RESUME
    assert factory.for_intent(Intent.CLOCK_OUT).work_item_action == WorkItemAction.FINALIZE


def test_end_break_rounds_minutes_half_up():
    session = AttendanceSession(
        session_id=1,
        user_id=1,
        clock_in=datetime(2026, 3, 2, 9, 0),
        break_start=datetime(2026, 3, 2, 12, 0),
        status=SessionStatus.ON_BREAK,
    )

    result = EndBreakStrategy().apply(session, now=datetime(2026, 3, 2, 12, 29, 30))

    assert result.session.total_break_minutes == 30
    assert result.session.break_start is None
    assert result.session.break_end == datetime(2026, 3, 2, 12, 29, 30)
    assert result.message == "Break time: 30 minutes"


def test_start_break_rejected_while_paused():
    session = AttendanceSession(
        session_id=1,
        user_id=1,
        clock_in=datetime(2026, 3, 2, 9, 0),
        pause_start=datetime(2026, 3, 2, 11, 0),
        status=SessionStatus.PAUSED,
    )

    with pytest.raises(ValidationError, match="End the pause"):
        StartBreakStrategy().apply(session, now=datetime(2026, 3, 2, 11, 5))
