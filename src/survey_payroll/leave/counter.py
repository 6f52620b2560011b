from __future__ import annotations

from typing import Iterable

from ..common.datetime_utils import clipped_days, month_bounds
from ..core.enums import RequestStatus
from .model import LeaveRequest
from .repository import LeaveRepository


def approved_days_in_month(leaves: Iterable[LeaveRequest], month: str) -> int:
    """Sum of approved leave days falling inside `month`.

    Each request is clipped to the month's first/last calendar day. Overlapping
    requests are counted independently.
    """
    first, last = month_bounds(month)
    total = 0
    for leave in leaves:
        if leave.status != RequestStatus.APPROVED:
            continue
        total += clipped_days(leave.start_date, leave.end_date, first, last)
    return total


class LeaveDayCounter:
    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def count_approved_leave_days(self, user_id: int, month: str) -> int:
        return approved_days_in_month(self._leaves.list_approved_for_user(int(user_id)), month)
