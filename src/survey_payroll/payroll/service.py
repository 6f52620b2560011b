from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local, parse_month
from ..core.exceptions import NotFoundError
from ..leave.counter import LeaveDayCounter
from ..surveys.repository import SurveyRepository
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class SalaryService:
    """Monthly salary derivation: read piecework, rejections and leave, write one record."""

    def __init__(
        self,
        users: UserRepository,
        surveys: SurveyRepository,
        leave_counter: LeaveDayCounter,
        salaries: SalaryRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._users = users
        self._surveys = surveys
        self._leave_counter = leave_counter
        self._salaries = salaries
        self._calculator = calculator or StandardPayrollCalculator()

    def calculate_salary(
        self,
        *,
        user_id: int,
        month: str,
        computed_by: int,
        now: Optional[datetime] = None,
    ) -> SalaryRecord:
        month = parse_month(month)
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("Employee not found")

        entries = self._surveys.list_entries_for_month(int(user_id), month)
        adjustments = self._surveys.list_rejections_for_user(int(user_id))
        leave_days = self._leave_counter.count_approved_leave_days(int(user_id), month)

        breakdown = self._calculator.calculate(
            month=month,
            entries=entries,
            adjustments=adjustments,
            leave_days=leave_days,
        )

        record = self._salaries.upsert(
            user_id=int(user_id),
            month=month,
            breakdown=breakdown,
            computed_by=int(computed_by),
            computed_at=now or now_local(),
        )
        logger.info(
            "salary for user %s %s: gross=%s rejected=-%s leave(%sd)=-%s final=%s",
            user_id,
            month,
            breakdown.gross_pay,
            breakdown.rejection_deduction,
            leave_days,
            breakdown.leave_deduction,
            breakdown.final_pay,
        )
        return record

    def get_salary(self, *, user_id: int, month: str) -> Optional[SalaryRecord]:
        return self._salaries.get_for_user_and_month(int(user_id), parse_month(month))

    def list_salaries(self, month: str) -> list[dict]:
        """Records for a month with the employee's public info attached."""
        out: list[dict] = []
        for record in self._salaries.list_for_month(parse_month(month)):
            row = record.to_dict()
            employee = self._users.get_by_id(record.user_id)
            row["employee"] = (
                {
                    "user_id": employee.user_id,
                    "username": employee.username,
                    "full_name": employee.full_name,
                    "department": employee.department,
                }
                if employee
                else None
            )
            out.append(row)
        return out
