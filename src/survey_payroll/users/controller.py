from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.web import (
    admin_required,
    current_role,
    domain_error_response,
    error_response,
    login_required,
)
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        try:
            s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("login failed")
            return error_response("Server error", 500)

        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value
        return jsonify(
            {
                "success": True,
                "user": {"user_id": s_user.user_id, "full_name": s_user.full_name, "role": s_user.role.value},
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        try:
            user = container.user_service.get_user(int(session["user_id"]))
            return jsonify({"success": True, "user": user.public_view()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to load current user")
            return error_response("Server error", 500)

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_list_employees")
    @admin_required
    def admin_list_employees():
        try:
            employees = container.user_service.list_employees()
            return jsonify({"success": True, "employees": [u.public_view() for u in employees]})
        except Exception:
            logger.exception("failed to list employees")
            return error_response("Server error", 500)

    @app.route("/api/admin/employees", methods=["POST"], endpoint="admin_create_employee")
    @admin_required
    def admin_create_employee():
        payload = request.get_json(silent=True) or {}
        try:
            user_id = container.user_service.register_employee(
                username=payload.get("username", ""),
                password=payload.get("password", ""),
                full_name=payload.get("full_name", ""),
                email=payload.get("email", ""),
                phone=payload.get("phone"),
                department=payload.get("department"),
                leave_balance=payload.get("leave_balance"),
            )
            user = container.user_service.get_user(user_id)
            return jsonify({"success": True, "employee": user.public_view()}), 201
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to create employee")
            return error_response("Server error", 500)

    @app.route("/api/admin/employees/<int:user_id>", methods=["GET"], endpoint="admin_get_employee")
    @admin_required
    def admin_get_employee(user_id: int):
        try:
            user = container.user_service.get_user(user_id)
            return jsonify({"success": True, "employee": user.public_view()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to load employee %s", user_id)
            return error_response("Server error", 500)

    @app.route("/api/admin/employees/<int:user_id>", methods=["PUT"], endpoint="admin_update_employee")
    @admin_required
    def admin_update_employee(user_id: int):
        payload = request.get_json(silent=True) or {}
        try:
            user = container.user_service.update_employee(user_id, payload)
            return jsonify({"success": True, "employee": user.public_view()})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to update employee %s", user_id)
            return error_response("Server error", 500)

    @app.route("/api/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="admin_delete_employee")
    @admin_required
    def admin_delete_employee(user_id: int):
        try:
            container.user_service.delete_employee(current_role=current_role(), user_id=user_id)
            return jsonify({"success": True, "message": "Employee deleted"})
        except DomainError as e:
            return domain_error_response(e)
        except Exception:
            logger.exception("failed to delete employee %s", user_id)
            return error_response("Server error", 500)
