from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import WorkItemStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import WorkItem
from .repository import WorkItemRepository

_COLUMNS = """
    work_item_id, user_id, task_description, start_time, end_time, status,
    pause_start, pause_end, total_pause_minutes, time_spent_minutes, created_at
"""


def _to_item(r: Dict[str, Any]) -> WorkItem:
    spent = r.get("time_spent_minutes")
    return WorkItem(
        work_item_id=int(r["work_item_id"]),
        user_id=int(r["user_id"]),
        task_description=r.get("task_description") or "",
        start_time=normalize_mysql_time(r.get("start_time")),
        end_time=normalize_mysql_time(r.get("end_time")),
        status=WorkItemStatus(r["status"]),
        pause_start=r.get("pause_start"),
        pause_end=r.get("pause_end"),
        total_pause_minutes=int(r.get("total_pause_minutes") or 0),
        time_spent_minutes=int(spent) if spent is not None else None,
        created_at=r.get("created_at"),
    )


class MySQLWorkItemRepository(WorkItemRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, work_item_id: int) -> Optional[WorkItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM work_items WHERE work_item_id=%s", (int(work_item_id),))
            r = fetchone(cur)
            return _to_item(r) if r else None

    def find_latest_open(self, *, user_id: int, status: WorkItemStatus) -> Optional[WorkItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_items
                WHERE user_id=%s AND status=%s AND end_time IS NULL
                ORDER BY created_at DESC, work_item_id DESC
                LIMIT 1
                """,
                (int(user_id), status.value),
            )
            r = fetchone(cur)
            return _to_item(r) if r else None

    def list_open_for_user(self, *, user_id: int, statuses: Iterable[WorkItemStatus]) -> Sequence[WorkItem]:
        values = [s.value for s in statuses]
        if not values:
            return []
        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM work_items
                WHERE user_id=%s AND end_time IS NULL AND status IN ({placeholders})
                ORDER BY created_at ASC, work_item_id ASC
                """,
                (int(user_id), *values),
            )
            return [_to_item(r) for r in fetchall(cur)]

    def update(self, item: WorkItem, *, expected_status: WorkItemStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE work_items
                SET status=%s, pause_start=%s, pause_end=%s, total_pause_minutes=%s,
                    time_spent_minutes=%s, end_time=%s
                WHERE work_item_id=%s AND status=%s
                """,
                (
                    item.status.value,
                    item.pause_start,
                    item.pause_end,
                    int(item.total_pause_minutes),
                    item.time_spent_minutes,
                    item.end_time,
                    int(item.work_item_id),
                    expected_status.value,
                ),
            )
            return cur.rowcount > 0
