from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveKind, RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_leave(
        self,
        *,
        user_id: int,
        leave_kind: LeaveKind,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        raise NotImplementedError

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_approved_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide_leave(self, *, request_id: int, status: RequestStatus, decided_by: int) -> bool:
        """Move a pending request to `status`. Returns False when it was no longer pending."""

        raise NotImplementedError

    def approve_and_charge(self, *, request_id: int, decided_by: int, user_id: int, days: int) -> Optional[int]:
        """Approve a pending request and take `days` off the balance (floored at 0) atomically.

        Returns the new balance, or None when the request was no longer pending.
        """

        raise NotImplementedError
