from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from ...common.datetime_utils import round_minutes
from ...core.enums import Intent
from ..model import AttendanceSession


class WorkItemAction(str, Enum):
    """What the work-item coordinator must do alongside a transition."""

    NONE = "none"
    HOLD = "hold"
    RESUME = "resume"
    FINALIZE = "finalize"


@dataclass(frozen=True)
class TransitionResult:
    session: AttendanceSession
    title: str
    message: str


def closed_minutes(start: Optional[datetime], now: datetime) -> int:
    if start is None:
        return 0
    return max(0, round_minutes(now - start))


class TransitionStrategy(ABC):
    """Strategy Pattern: one class per session transition.

    ``apply`` validates the current session and returns the next one; it never
    touches storage. Status is re-derived by the caller.
    """

    intent: Intent
    work_item_action: WorkItemAction = WorkItemAction.NONE

    @abstractmethod
    def apply(self, session: AttendanceSession, *, now: datetime) -> TransitionResult:
        raise NotImplementedError
