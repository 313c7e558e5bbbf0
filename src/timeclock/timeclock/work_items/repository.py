from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import WorkItemStatus
from .model import WorkItem


class WorkItemRepository(Protocol):
    def get_by_id(self, work_item_id: int) -> Optional[WorkItem]:
        raise NotImplementedError

    def find_latest_open(self, *, user_id: int, status: WorkItemStatus) -> Optional[WorkItem]:
        """Most recently created item of the user in ``status`` with no ``end_time``."""

        raise NotImplementedError

    def list_open_for_user(self, *, user_id: int, statuses: Iterable[WorkItemStatus]) -> Sequence[WorkItem]:
        raise NotImplementedError

    def update(self, item: WorkItem, *, expected_status: WorkItemStatus) -> bool:
        """Write the mutable fields if the stored status is still ``expected_status``."""

        raise NotImplementedError
