from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import WorkItemStatus


@dataclass(frozen=True)
class WorkItem:
    """A separately tracked unit of task time.

    Owned by the work-logging subsystem; attendance only pauses, resumes and
    completes it. ``start_time``/``end_time`` are wall-clock ``HH:MM`` strings.
    """

    work_item_id: int
    user_id: int
    status: WorkItemStatus
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    pause_start: Optional[datetime] = None
    pause_end: Optional[datetime] = None
    total_pause_minutes: int = 0
    time_spent_minutes: Optional[int] = None
    task_description: str = ""
    created_at: Optional[datetime] = None
