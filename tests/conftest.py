from __future__ import annotations

from datetime import datetime

import pytest

from src.timeclock.timeclock.attendance.service import AttendanceService
from src.timeclock.timeclock.work_items.coordinator import WorkItemCoordinator

from fakes import InMemoryAttendance, InMemoryWorkItems, RecordingNotifier


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def work_items_repo() -> InMemoryWorkItems:
    return InMemoryWorkItems()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def service(attendance_repo, work_items_repo, notifier) -> AttendanceService:
    return AttendanceService(attendance_repo, WorkItemCoordinator(work_items_repo), notifier)
