from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import admin_required, current_user_id, domain_error_response, error_response, login_required
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/check-in", methods=["POST"], endpoint="check_in")
    @login_required
    def check_in():
        try:
            record = container.attendance_service.check_in(current_user_id(), now=now_local())
            return jsonify({"success": True, "attendance": record.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("check-in failed")
            return error_response("Server error", 500)

    @app.route("/api/attendance/check-out", methods=["POST"], endpoint="check_out")
    @login_required
    def check_out():
        try:
            record = container.attendance_service.check_out(current_user_id(), now=now_local())
            return jsonify({"success": True, "attendance": record.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("check-out failed")
            return error_response("Server error", 500)

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_history")
    @login_required
    def attendance_history():
        try:
            records = container.attendance_service.get_history(current_user_id())
            return jsonify({"success": True, "attendance": [r.to_dict() for r in records]})
        except Exception:
            logger.exception("failed to load attendance history")
            return error_response("Server error", 500)

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            record = container.attendance_service.get_today_record(current_user_id(), now_local().date())
            return jsonify({"success": True, "attendance": record.to_dict() if record else None})
        except Exception:
            logger.exception("failed to load today's attendance")
            return error_response("Server error", 500)

    @app.route("/api/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    @app.route("/api/admin/attendance/<work_date>", methods=["GET"], endpoint="admin_attendance_for_date")
    @admin_required
    def admin_attendance(work_date: Optional[str] = None):
        try:
            day = parse_iso_date(work_date) if work_date else now_local().date()
            records = container.attendance_service.list_for_date(day)
            return jsonify({"success": True, "date": day.isoformat(), "attendance": [r.to_dict() for r in records]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to load attendance for %s", work_date)
            return error_response("Server error", 500)
