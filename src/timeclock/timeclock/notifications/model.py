from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import NOTIFICATION_LINK
from ..core.enums import NotificationType


@dataclass(frozen=True)
class NotificationEvent:
    user_id: int
    title: str
    message: str
    type: NotificationType = NotificationType.ATTENDANCE
    link: str = NOTIFICATION_LINK
