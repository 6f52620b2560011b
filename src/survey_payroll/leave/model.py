from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import inclusive_days
from ..core.enums import LeaveKind, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    user_id: int
    leave_kind: LeaveKind
    start_date: date
    end_date: date
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None

    @property
    def day_count(self) -> int:
        """Whole-request length, both ends included."""
        return inclusive_days(self.start_date, self.end_date)

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "leave_kind": self.leave_kind.value,
            "start_date": self.start_date.strftime("%Y-%m-%d"),
            "end_date": self.end_date.strftime("%Y-%m-%d"),
            "days": self.day_count,
            "reason": self.reason,
            "status": self.status.value,
            "created_at": self.created_at.strftime("%Y-%m-%d %H:%M"),
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.strftime("%Y-%m-%d %H:%M") if self.decided_at else None,
        }
