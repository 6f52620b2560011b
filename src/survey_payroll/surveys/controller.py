from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import current_month, now_local, parse_iso_date
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
    @app.route("/api/surveys", methods=["POST"], endpoint="submit_survey")
    @login_required
    def submit_survey():
        payload = request.get_json(silent=True) or {}
        try:
            entry = container.survey_service.submit_piecework(
                user_id=current_user_id(),
                category=payload.get("category"),
                completed=payload.get("completed"),
                work_date=now_local().date(),
            )
            return jsonify({"success": True, "survey": entry.to_dict()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("survey submission failed")
            return error_response("Server error", 500)

    @app.route("/api/surveys", methods=["GET"], endpoint="my_surveys")
    @login_required
    def my_surveys():
        try:
            entries = container.survey_service.list_my_entries(current_user_id())
            return jsonify({"success": True, "surveys": [e.to_dict() for e in entries]})
        except Exception:
            logger.exception("failed to list surveys")
            return error_response("Server error", 500)

    @app.route("/api/surveys/today", methods=["GET"], endpoint="surveys_today")
    @login_required
    def surveys_today():
        try:
            summary = container.survey_service.today_summary(current_user_id(), today=now_local().date())
            return jsonify(
                {
                    "success": True,
                    "surveys": {k: (v.to_dict() if v else None) for k, v in summary.items()},
                    "rates": container.rates.as_dict(),
                }
            )
        except Exception:
            logger.exception("failed to load today's surveys")
            return error_response("Server error", 500)

    @app.route("/api/admin/surveys", methods=["GET"], endpoint="admin_surveys")
    @app.route("/api/admin/surveys/<work_date>", methods=["GET"], endpoint="admin_surveys_for_date")
    @admin_required
    def admin_surveys(work_date: Optional[str] = None):
        try:
            day = parse_iso_date(work_date) if work_date else now_local().date()
            entries = container.survey_service.list_for_date(day)
            return jsonify({"success": True, "date": day.isoformat(), "surveys": [e.to_dict() for e in entries]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to load surveys for %s", work_date)
            return error_response("Server error", 500)

    @app.route("/api/admin/rejected-surveys", methods=["POST"], endpoint="record_rejected_surveys")
    @admin_required
    def record_rejected_surveys():
        payload = request.get_json(silent=True) or {}
        try:
            adjustment = container.survey_service.record_rejection(
                current_role=current_role(),
                admin_user_id=current_user_id(),
                user_id=payload.get("user_id"),
                month=payload.get("month", ""),
                category=payload.get("category"),
                rejected=payload.get("rejected"),
            )
            return jsonify({"success": True, "rejected_survey": adjustment.to_dict()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to record rejected surveys")
            return error_response("Server error", 500)

    @app.route("/api/admin/rejected-surveys", methods=["GET"], endpoint="rejected_surveys")
    @app.route("/api/admin/rejected-surveys/<month>", methods=["GET"], endpoint="rejected_surveys_for_month")
    @admin_required
    def rejected_surveys(month: Optional[str] = None):
        try:
            month = month or current_month(now_local().date())
            adjustments = container.survey_service.list_rejections(month)
            return jsonify({"success": True, "month": month, "rejected_surveys": [a.to_dict() for a in adjustments]})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to list rejected surveys for %s", month)
            return error_response("Server error", 500)
