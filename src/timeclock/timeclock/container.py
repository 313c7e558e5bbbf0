from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .attendance.auto_clock_out import AutoClockOutService
from .attendance.factory import TransitionFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_AUTO_CLOCK_OUT_HOURS,
    DEFAULT_REMINDER_INTERVAL_SECONDS,
    DEFAULT_REMINDER_THRESHOLD_MINUTES,
    DEFAULT_WEEKLY_TARGET_HOURS,
)
from .database.connection import DBConfig, DatabaseConnection
from .database.mysql_base import transaction
from .notifications.mysql_notification_repository import MySQLNotifier
from .reminders.scheduler import ReminderLoop, ThresholdReminderScheduler
from .reports.service import ReportService
from .work_items.coordinator import WorkItemCoordinator
from .work_items.mysql_work_item_repository import MySQLWorkItemRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendance_repo: MySQLAttendanceRepository
    work_items_repo: MySQLWorkItemRepository
    notifier: MySQLNotifier

    coordinator: WorkItemCoordinator
    attendance_service: AttendanceService
    report_service: ReportService
    auto_clock_out_service: AutoClockOutService
    reminder_scheduler: ThresholdReminderScheduler
    reminder_loop: ReminderLoop


def build_container(*, db_config: dict, options: Optional[Mapping[str, Any]] = None) -> Container:
    options = dict(options or {})
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    attendance_repo = MySQLAttendanceRepository(conn)
    work_items_repo = MySQLWorkItemRepository(conn)
    notifier = MySQLNotifier(conn)

    coordinator = WorkItemCoordinator(work_items_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        coordinator,
        notifier,
        factory=TransitionFactory(),
        transaction=lambda: transaction(conn),
        allow_concurrent_sessions=bool(options.get("allow_concurrent_sessions", False)),
    )
    report_service = ReportService(
        attendance_repo,
        weekly_target_hours=int(options.get("weekly_target_hours", DEFAULT_WEEKLY_TARGET_HOURS)),
    )
    auto_clock_out_service = AutoClockOutService(
        attendance_repo,
        attendance_service,
        max_hours=int(options.get("auto_clock_out_hours", DEFAULT_AUTO_CLOCK_OUT_HOURS)),
    )
    reminder_scheduler = ThresholdReminderScheduler(
        attendance_repo,
        notifier,
        threshold_minutes=int(options.get("reminder_threshold_minutes", DEFAULT_REMINDER_THRESHOLD_MINUTES)),
    )
    reminder_loop = ReminderLoop(
        reminder_scheduler,
        interval_seconds=float(options.get("reminder_interval_seconds", DEFAULT_REMINDER_INTERVAL_SECONDS)),
    )

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        work_items_repo=work_items_repo,
        notifier=notifier,
        coordinator=coordinator,
        attendance_service=attendance_service,
        report_service=report_service,
        auto_clock_out_service=auto_clock_out_service,
        reminder_scheduler=reminder_scheduler,
        reminder_loop=reminder_loop,
    )
