from __future__ import annotations

from datetime import date
from typing import Any

from ..attendance.repository import AttendanceRepository
from ..core.enums import RequestStatus, Role
from ..core.constants import DEFAULT_LIST_LIMIT
from ..leave.repository import LeaveRepository
from ..surveys.repository import SurveyRepository
from ..surveys.service import SurveyService
from ..users.repository import UserRepository


class DashboardService:
    """Read-only admin overview for a day and a month."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        surveys: SurveyRepository,
        survey_service: SurveyService,
    ):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves
        self._surveys = surveys
        self._survey_service = survey_service

    def stats(self, *, month: str, today: date) -> dict[str, Any]:
        employees = self._users.list_all(role=Role.EMPLOYEE)
        present = {r.user_id for r in self._attendance.list_for_date(today)}
        pending = self._leaves.list_leave_requests(status=RequestStatus.PENDING, limit=DEFAULT_LIST_LIMIT)
        surveys_today = sum(e.completed for e in self._surveys.list_entries_for_date(today))

        return {
            "month": month,
            "date": today.isoformat(),
            "total_employees": len(employees),
            "present_today": len(present),
            "pending_leaves": len(pending),
            "surveys_completed_today": surveys_today,
            "survey_stats": self._survey_service.month_stats(month),
        }
