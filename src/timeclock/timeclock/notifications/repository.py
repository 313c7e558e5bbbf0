from __future__ import annotations

from typing import Protocol

from .model import NotificationEvent


class Notifier(Protocol):
    """Notification collaborator. Delivery is fire-and-forget."""

    def create_notification(self, event: NotificationEvent) -> None:
        """Persist a notification record for the user's inbox."""

        raise NotImplementedError

    def push_alert(self, event: NotificationEvent) -> None:
        """Show a transient, user-visible alert."""

        raise NotImplementedError
