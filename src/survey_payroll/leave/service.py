from __future__ import annotations

import logging
from datetime import date
from typing import Any

from ..common.validators import require_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveKind, RequestStatus, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    """Leave filing and the pending -> approved/rejected decision flow."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def create_leave(
        self,
        *,
        current_role: Role,
        user_id: int,
        leave_kind: Any,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can apply for leave")

        kind = require_enum(LeaveKind, leave_kind, "Leave type")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        reason = require_non_empty(reason, "Reason")

        request_id = self._leaves.create_leave(
            user_id=int(user_id),
            leave_kind=kind,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        logger.info("user %s filed %s leave %s..%s (request_id=%s)", user_id, kind.value, start_date, end_date, request_id)
        return request_id

    def _get_pending(self, request_id: int) -> LeaveRequest:
        req = self._leaves.get_leave(request_id=int(request_id))
        if not req:
            raise NotFoundError("Leave application not found")
        if req.status != RequestStatus.PENDING:
            raise ConflictError(f"Leave application is already {req.status.value}")
        return req

    def approve_leave(self, *, current_role: Role, admin_user_id: int, request_id: int) -> int:
        """Approve a pending request and charge its length to the leave balance.

        Returns the employee's new leave balance (never below zero).
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        req = self._get_pending(request_id)

        # Conditional on status='pending': a concurrent second approval gets None here.
        new_balance = self._leaves.approve_and_charge(
            request_id=req.request_id,
            decided_by=int(admin_user_id),
            user_id=req.user_id,
            days=req.day_count,
        )
        if new_balance is None:
            raise ConflictError("Leave application was already decided")

        logger.info(
            "admin %s approved leave %s (%s days) for user %s, balance now %s",
            admin_user_id,
            req.request_id,
            req.day_count,
            req.user_id,
            new_balance,
        )
        return new_balance

    def reject_leave(self, *, current_role: Role, admin_user_id: int, request_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        req = self._get_pending(request_id)
        if not self._leaves.decide_leave(
            request_id=req.request_id,
            status=RequestStatus.REJECTED,
            decided_by=int(admin_user_id),
        ):
            raise ConflictError("Leave application was already decided")
        logger.info("admin %s rejected leave %s for user %s", admin_user_id, req.request_id, req.user_id)

    def decide(self, *, current_role: Role, admin_user_id: int, request_id: int, status: Any) -> LeaveRequest:
        decision = require_enum(RequestStatus, status, "Status")
        if decision == RequestStatus.APPROVED:
            self.approve_leave(current_role=current_role, admin_user_id=admin_user_id, request_id=request_id)
        elif decision == RequestStatus.REJECTED:
            self.reject_leave(current_role=current_role, admin_user_id=admin_user_id, request_id=request_id)
        else:
            raise ValidationError("Status must be approved or rejected")
        return self._leaves.get_leave(request_id=int(request_id))

    def list_my_leaves(self, *, user_id: int):
        return self._leaves.list_leave_requests(user_id=int(user_id), limit=200)

    def list_pending(self):
        return self._leaves.list_leave_requests(status=RequestStatus.PENDING, limit=DEFAULT_LIST_LIMIT)
