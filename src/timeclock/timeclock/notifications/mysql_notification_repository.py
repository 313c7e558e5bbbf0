from __future__ import annotations

import logging

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .model import NotificationEvent
from .repository import Notifier

logger = logging.getLogger(__name__)


class MySQLNotifier(Notifier):
    """Stores notification records; alerts are only logged (transport lives elsewhere)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_notification(self, event: NotificationEvent) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, title, message, type, link)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(event.user_id), event.title, event.message, event.type.value, event.link),
            )

    def push_alert(self, event: NotificationEvent) -> None:
        logger.info("alert for user %s: %s - %s", event.user_id, event.title, event.message)
