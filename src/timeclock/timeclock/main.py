from __future__ import annotations

import importlib
import logging
from pathlib import Path

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .core.constants import (
    DEFAULT_AUTO_CLOCK_OUT_HOURS,
    DEFAULT_REMINDER_INTERVAL_SECONDS,
    DEFAULT_REMINDER_THRESHOLD_MINUTES,
    DEFAULT_WEEKLY_TARGET_HOURS,
)
from .database.bootstrap import apply_schema, list_tables

from .container import build_container
from .attendance.commands import register as register_commands
from .attendance.controller import register as register_attendance

logger = logging.getLogger(__name__)


def _attendance_options(settings) -> dict:
    return {
        "allow_concurrent_sessions": bool(getattr(settings, "ALLOW_CONCURRENT_SESSIONS", False)),
        "reminder_threshold_minutes": int(getattr(settings, "REMINDER_THRESHOLD_MINUTES", DEFAULT_REMINDER_THRESHOLD_MINUTES)),
        "reminder_interval_seconds": float(getattr(settings, "REMINDER_INTERVAL_SECONDS", DEFAULT_REMINDER_INTERVAL_SECONDS)),
        "auto_clock_out_hours": int(getattr(settings, "AUTO_CLOCK_OUT_HOURS", DEFAULT_AUTO_CLOCK_OUT_HOURS)),
        "weekly_target_hours": int(getattr(settings, "WEEKLY_TARGET_HOURS", DEFAULT_WEEKLY_TARGET_HOURS)),
    }


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(db_config=db_config, options=_attendance_options(settings))
    app.extensions["timeclock"] = container

    register_attendance(app, container)
    register_commands(app, container)

    if bool(getattr(settings, "REMINDER_ENABLED", False)) and not app.config["TESTING"]:
        container.reminder_loop.start()

    return app
