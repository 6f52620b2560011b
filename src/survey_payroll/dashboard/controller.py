from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify

from ..common.datetime_utils import current_month, now_local, parse_month
from ..common.web import admin_required, domain_error_response, error_response
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/stats", methods=["GET"], endpoint="admin_stats")
    @app.route("/api/admin/stats/<month>", methods=["GET"], endpoint="admin_stats_for_month")
    @admin_required
    def admin_stats(month: Optional[str] = None):
        try:
            today = now_local().date()
            month = parse_month(month) if month else current_month(today)
            return jsonify({"success": True, "stats": container.dashboard_service.stats(month=month, today=today)})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to build stats for %s", month)
            return error_response("Server error", 500)
