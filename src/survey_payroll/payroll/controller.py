from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import current_month, now_local
from ..common.validators import require_positive_int
from ..common.web import admin_required, current_user_id, domain_error_response, error_response, login_required
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/salary", methods=["GET"], endpoint="my_salary")
    @app.route("/api/salary/<month>", methods=["GET"], endpoint="my_salary_for_month")
    @login_required
    def my_salary(month: Optional[str] = None):
        try:
            month = month or current_month(now_local().date())
            record = container.salary_service.get_salary(user_id=current_user_id(), month=month)
            return jsonify({"success": True, "month": month, "salary": record.to_dict() if record else None})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to load salary for %s", month)
            return error_response("Server error", 500)

    @app.route("/api/admin/calculate-salary", methods=["POST"], endpoint="calculate_salary")
    @admin_required
    def calculate_salary():
        payload = request.get_json(silent=True) or {}
        try:
            record = container.salary_service.calculate_salary(
                user_id=require_positive_int(payload.get("user_id"), "User ID"),
                month=payload.get("month", ""),
                computed_by=current_user_id(),
            )
            return jsonify({"success": True, "salary": record.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("salary calculation failed")
            return error_response("Server error", 500)

    @app.route("/api/admin/salaries", methods=["GET"], endpoint="admin_salaries")
    @app.route("/api/admin/salaries/<month>", methods=["GET"], endpoint="admin_salaries_for_month")
    @admin_required
    def admin_salaries(month: Optional[str] = None):
        try:
            month = month or current_month(now_local().date())
            return jsonify({"success": True, "month": month, "salaries": container.salary_service.list_salaries(month)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to list salaries for %s", month)
            return error_response("Server error", 500)
