from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from functools import wraps
from typing import Any, Optional

from flask import Flask, jsonify, request, session

from ..common.validators import optional_coordinates
from ..core.constants import DEFAULT_WORK_LOCATION
from ..core.enums import ClockType, Role
from ..core.exceptions import AuthorizationError, ConcurrencyError, PersistenceError, ValidationError
from .model import AttendanceSession, SessionEdit


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def session_to_json(s: Optional[AttendanceSession]) -> Optional[dict[str, Any]]:
    if s is None:
        return None
    return {
        "id": s.session_id,
        "user_id": s.user_id,
        "clock_in": _iso(s.clock_in),
        "clock_out": _iso(s.clock_out),
        "clock_type": s.clock_type.value,
        "break_start": _iso(s.break_start),
        "break_end": _iso(s.break_end),
        "total_break_minutes": s.total_break_minutes,
        "pause_start": _iso(s.pause_start),
        "pause_end": _iso(s.pause_end),
        "total_pause_minutes": s.total_pause_minutes,
        "status": s.status.value,
        "location_name": s.location_name,
        "is_edited": s.is_edited,
    }


def _parse_dt(payload: dict, key: str, *, required: bool = False) -> Optional[datetime]:
    raw = payload.get(key)
    if raw in (None, ""):
        if required:
            raise ValidationError(f"{key} is required")
        return None
    try:
        value = datetime.fromisoformat(str(raw))
    except ValueError:
        raise ValidationError(f"{key} is not a valid date/time")
    # sessions are stored in naive local time
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def register(app: Flask, container) -> None:
    def login_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            return view(*args, **kwargs)

        return wrapper

    def admin_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return jsonify({"success": False, "message": "Please sign in to continue"}), 401
            if session.get("role") != Role.ADMIN.value:
                return jsonify({"success": False, "message": "You do not have permission"}), 403
            return view(*args, **kwargs)

        return wrapper

    def respond(action, message: str):
        try:
            result = action()
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except AuthorizationError as e:
            return jsonify({"success": False, "message": str(e)}), 403
        except ConcurrencyError as e:
            return jsonify({"success": False, "message": str(e)}), 409
        except PersistenceError as e:
            app.logger.exception("attendance store failure")
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "message": message, "session": session_to_json(result)}), 200

    def current_user_id() -> int:
        return int(session["user_id"])

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @login_required
    def clock_in():
        data = request.get_json(silent=True) or {}
        coordinates = optional_coordinates(data.get("latitude"), data.get("longitude"))
        return respond(
            lambda: container.attendance_service.clock_in(
                current_user_id(),
                data.get("clock_type") or ClockType.PAYROLL.value,
                work_location=data.get("work_location") or DEFAULT_WORK_LOCATION,
                coordinates=coordinates,
            ),
            "Clocked in",
        )

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @login_required
    def clock_out():
        return respond(lambda: container.attendance_service.clock_out(current_user_id()), "Clocked out")

    @app.route("/api/attendance/break/start", methods=["POST"], endpoint="attendance_break_start")
    @login_required
    def start_break():
        return respond(lambda: container.attendance_service.start_break(current_user_id()), "Break started")

    @app.route("/api/attendance/break/end", methods=["POST"], endpoint="attendance_break_end")
    @login_required
    def end_break():
        return respond(lambda: container.attendance_service.end_break(current_user_id()), "Break ended")

    @app.route("/api/attendance/pause/start", methods=["POST"], endpoint="attendance_pause_start")
    @login_required
    def start_pause():
        return respond(lambda: container.attendance_service.start_pause(current_user_id()), "Tracking paused")

    @app.route("/api/attendance/pause/end", methods=["POST"], endpoint="attendance_pause_end")
    @login_required
    def end_pause():
        return respond(lambda: container.attendance_service.end_pause(current_user_id()), "Tracking resumed")

    @app.route("/api/attendance/status", methods=["GET"], endpoint="attendance_status")
    @login_required
    def status():
        try:
            view = container.attendance_service.get_status(current_user_id())
        except PersistenceError as e:
            app.logger.exception("attendance store failure")
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify(
            {
                "success": True,
                "state": view.state.value,
                "elapsed": view.elapsed,
                "net_worked_ms": view.net_worked_ms,
                "session": session_to_json(view.session),
            }
        )

    @app.route("/api/attendance/monthly-hours", methods=["GET"], endpoint="attendance_monthly_hours")
    @login_required
    def monthly_hours():
        try:
            hours = container.report_service.get_monthly_hours(current_user_id())
        except PersistenceError as e:
            app.logger.exception("attendance store failure")
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, "hours": hours})

    @app.route("/api/attendance/breakdown", methods=["GET"], endpoint="attendance_breakdown")
    @login_required
    def breakdown():
        try:
            data = container.report_service.get_user_breakdown(current_user_id())
        except PersistenceError as e:
            app.logger.exception("attendance store failure")
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify({"success": True, **asdict(data)})

    @app.route("/api/attendance/team", methods=["GET"], endpoint="attendance_team")
    @admin_required
    def team():
        try:
            board = container.report_service.get_team_board()
        except PersistenceError as e:
            app.logger.exception("attendance store failure")
            return jsonify({"success": False, "message": str(e)}), 500
        return jsonify(
            {
                "success": True,
                "members": [
                    {
                        "user_id": m.user_id,
                        "session_id": m.session_id,
                        "status": m.status,
                        "last_action": _iso(m.last_action),
                    }
                    for m in board
                ],
            }
        )

    @app.route("/api/attendance/sessions/<int:session_id>", methods=["PUT"], endpoint="attendance_admin_edit")
    @admin_required
    def admin_edit(session_id: int):
        data = request.get_json(silent=True) or {}

        def edit():
            changes = SessionEdit(
                clock_in=_parse_dt(data, "clock_in", required=True),
                clock_out=_parse_dt(data, "clock_out"),
                break_start=_parse_dt(data, "break_start"),
                break_end=_parse_dt(data, "break_end"),
                pause_start=_parse_dt(data, "pause_start"),
                pause_end=_parse_dt(data, "pause_end"),
            )
            return container.attendance_service.admin_edit_session(
                current_role=Role(session.get("role")),
                editor_id=current_user_id(),
                session_id=int(session_id),
                changes=changes,
                reason=data.get("reason", ""),
            )

        return respond(edit, "Attendance record updated")
