from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    domain_error_response,
    error_response,
    login_required,
)
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/leave", methods=["POST"], endpoint="apply_leave")
    @login_required
    def apply_leave():
        payload = request.get_json(silent=True) or {}
        try:
            request_id = container.leave_service.create_leave(
                current_role=current_role(),
                user_id=current_user_id(),
                leave_kind=payload.get("leave_kind"),
                start_date=parse_iso_date(payload.get("start_date")),
                end_date=parse_iso_date(payload.get("end_date")),
                reason=payload.get("reason", ""),
            )
            return jsonify({"success": True, "request_id": request_id}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("leave application failed")
            return error_response("Server error", 500)

    @app.route("/api/leave", methods=["GET"], endpoint="my_leave")
    @login_required
    def my_leave():
        try:
            leaves = container.leave_service.list_my_leaves(user_id=current_user_id())
            return jsonify({"success": True, "leave_requests": [lv.to_dict() for lv in leaves]})
        except Exception:
            logger.exception("failed to list leave applications")
            return error_response("Server error", 500)

    @app.route("/api/admin/leave", methods=["GET"], endpoint="admin_pending_leave")
    @admin_required
    def admin_pending_leave():
        try:
            leaves = container.leave_service.list_pending()
            return jsonify({"success": True, "leave_requests": [lv.to_dict() for lv in leaves]})
        except Exception:
            logger.exception("failed to list pending leave")
            return error_response("Server error", 500)

    @app.route("/api/admin/leave/<int:request_id>", methods=["PUT"], endpoint="admin_decide_leave")
    @admin_required
    def admin_decide_leave(request_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            leave = container.leave_service.decide(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                request_id=request_id,
                status=payload.get("status"),
            )
            return jsonify({"success": True, "leave_request": leave.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to decide leave %s", request_id)
            return error_response("Server error", 500)
