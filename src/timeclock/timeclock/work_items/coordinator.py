from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import round_minutes, to_wall_clock, wall_clock_span_minutes
from ..core.enums import WorkItemStatus
from ..core.exceptions import DomainError
from .model import WorkItem
from .repository import WorkItemRepository

logger = logging.getLogger(__name__)

OPEN_STATUSES = (WorkItemStatus.IN_PROGRESS, WorkItemStatus.ON_HOLD, WorkItemStatus.PENDING)


def _pause_minutes(item: WorkItem, now: datetime) -> int:
    if item.pause_start is None:
        return 0
    return max(0, round_minutes(now - item.pause_start))


class WorkItemCoordinator:
    """Keeps the user's tracked work item in step with attendance transitions."""

    def __init__(self, work_items: WorkItemRepository):
        self._work_items = work_items

    def on_hold(self, user_id: int, now: datetime) -> Optional[int]:
        """Put the user's latest in-progress item on hold; returns its id (or None)."""
        item = self._work_items.find_latest_open(user_id=user_id, status=WorkItemStatus.IN_PROGRESS)
        if item is None:
            return None

        held = replace(item, status=WorkItemStatus.ON_HOLD, pause_start=now, pause_end=None)
        if not self._work_items.update(held, expected_status=WorkItemStatus.IN_PROGRESS):
            logger.info("work item %s changed before it could be put on hold", item.work_item_id)
            return None
        return item.work_item_id

    def on_resume(self, work_item_id: Optional[int], now: datetime) -> bool:
        """Resume exactly the item a session put on hold."""
        if work_item_id is None:
            return False

        item = self._work_items.get_by_id(work_item_id)
        if item is None or item.status != WorkItemStatus.ON_HOLD or item.end_time is not None:
            logger.info("work item %s is no longer on hold, nothing to resume", work_item_id)
            return False

        resumed = replace(
            item,
            status=WorkItemStatus.IN_PROGRESS,
            pause_start=None,
            pause_end=now,
            total_pause_minutes=int(item.total_pause_minutes or 0) + _pause_minutes(item, now),
        )
        return self._work_items.update(resumed, expected_status=WorkItemStatus.ON_HOLD)

    def on_clock_out(self, user_id: int, clock_out: datetime) -> list[int]:
        """Complete every open item of the user; one failing item never stops the rest."""
        completed: list[int] = []
        for item in self._work_items.list_open_for_user(user_id=user_id, statuses=OPEN_STATUSES):
            try:
                if self._complete(item, clock_out):
                    completed.append(item.work_item_id)
                else:
                    logger.warning("work item %s changed during clock-out, left as is", item.work_item_id)
            except (DomainError, ValueError):
                logger.exception("failed to complete work item %s at clock-out", item.work_item_id)
        return completed

    def _complete(self, item: WorkItem, clock_out: datetime) -> bool:
        total_pause = int(item.total_pause_minutes or 0)
        pause_end = item.pause_end
        if item.status == WorkItemStatus.ON_HOLD and item.pause_start is not None:
            total_pause += _pause_minutes(item, clock_out)
            pause_end = clock_out

        end_time = to_wall_clock(clock_out)
        spent = 0
        if item.start_time:
            spent = max(0, wall_clock_span_minutes(item.start_time, end_time) - total_pause)

        done = replace(
            item,
            status=WorkItemStatus.COMPLETED,
            pause_start=None,
            pause_end=pause_end,
            total_pause_minutes=total_pause,
            time_spent_minutes=spent,
            end_time=end_time,
        )
        return self._work_items.update(done, expected_status=item.status)
