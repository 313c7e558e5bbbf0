from __future__ import annotations

from datetime import datetime

from src.timeclock.timeclock.core.enums import WorkItemStatus
from src.timeclock.timeclock.work_items.coordinator import WorkItemCoordinator
from src.timeclock.timeclock.work_items.model import WorkItem

from fakes import InMemoryWorkItems


def test_hold_picks_latest_in_progress_item():
    items = InMemoryWorkItems(
        [
            WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.IN_PROGRESS, created_at=datetime(2026, 3, 2, 8, 0)),
            WorkItem(work_item_id=2, user_id=7, status=WorkItemStatus.IN_PROGRESS, created_at=datetime(2026, 3, 2, 10, 0)),
        ]
    )

    held = WorkItemCoordinator(items).on_hold(7, datetime(2026, 3, 2, 11, 0))

    assert held == 2
    assert items.get_by_id(2).status == WorkItemStatus.ON_HOLD
    assert items.get_by_id(1).status == WorkItemStatus.IN_PROGRESS


def test_hold_without_item_is_a_no_op():
    assert WorkItemCoordinator(InMemoryWorkItems()).on_hold(7, datetime(2026, 3, 2, 11, 0)) is None


def test_scenario_pause_eleven_to_quarter_past():
    items = InMemoryWorkItems([WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.IN_PROGRESS, start_time="09:00")])
    coordinator = WorkItemCoordinator(items)

    held = coordinator.on_hold(7, datetime(2026, 3, 2, 11, 0))
    assert items.get_by_id(1).status == WorkItemStatus.ON_HOLD

    assert coordinator.on_resume(held, datetime(2026, 3, 2, 11, 15)) is True
    item = items.get_by_id(1)
    assert item.status == WorkItemStatus.IN_PROGRESS
    assert item.total_pause_minutes == 15
    assert item.pause_end == datetime(2026, 3, 2, 11, 15)


def test_resume_skips_item_completed_meanwhile():
    items = InMemoryWorkItems([WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.COMPLETED, end_time="10:00")])

    assert WorkItemCoordinator(items).on_resume(1, datetime(2026, 3, 2, 11, 15)) is False
    assert WorkItemCoordinator(items).on_resume(None, datetime(2026, 3, 2, 11, 15)) is False


def test_time_spent_wraps_past_midnight():
    items = InMemoryWorkItems(
        [WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.IN_PROGRESS, start_time="23:30", total_pause_minutes=5)]
    )

    completed = WorkItemCoordinator(items).on_clock_out(7, datetime(2026, 3, 3, 0, 15))

    assert completed == [1]
    assert items.get_by_id(1).time_spent_minutes == 40
    assert items.get_by_id(1).end_time == "00:15"


def test_clock_out_closes_running_hold():
    items = InMemoryWorkItems(
        [
            WorkItem(
                work_item_id=1,
                user_id=7,
                status=WorkItemStatus.ON_HOLD,
                start_time="09:00",
                pause_start=datetime(2026, 3, 2, 12, 0),
                total_pause_minutes=10,
            )
        ]
    )

    WorkItemCoordinator(items).on_clock_out(7, datetime(2026, 3, 2, 12, 30))

    item = items.get_by_id(1)
    assert item.status == WorkItemStatus.COMPLETED
    assert item.total_pause_minutes == 40
    assert item.time_spent_minutes == 210 - 40
    assert item.pause_start is None


def test_item_without_start_time_gets_zero_minutes():
    items = InMemoryWorkItems([WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.PENDING)])

    WorkItemCoordinator(items).on_clock_out(7, datetime(2026, 3, 2, 17, 0))

    assert items.get_by_id(1).time_spent_minutes == 0


def test_one_failing_item_does_not_stop_the_rest():
    items = InMemoryWorkItems(
        [
            WorkItem(work_item_id=1, user_id=7, status=WorkItemStatus.IN_PROGRESS, start_time="09:00"),
            WorkItem(work_item_id=2, user_id=7, status=WorkItemStatus.PENDING, start_time="bogus"),
            WorkItem(work_item_id=3, user_id=7, status=WorkItemStatus.PENDING, start_time="10:00"),
        ]
    )
    items.failing_ids.add(1)

    completed = WorkItemCoordinator(items).on_clock_out(7, datetime(2026, 3, 2, 17, 0))

    assert completed == [3]
    assert items.get_by_id(3).time_spent_minutes == 420
