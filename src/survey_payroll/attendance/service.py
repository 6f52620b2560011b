from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        """Open today's record. Checking in again while still open returns the open record."""
        now = now or now_local()
        today = now.date()

        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("Employee not found")

        existing = self._attendance.get_for_user_and_date(int(user_id), today)
        if existing:
            if existing.is_complete:
                raise ValidationError("You have already completed your attendance for today")
            return existing

        attendance_id = self._attendance.create_checkin(user_id=int(user_id), work_date=today, check_in_time=now)
        logger.info("user %s checked in (attendance_id=%s)", user_id, attendance_id)
        return AttendanceRecord(attendance_id=attendance_id, user_id=int(user_id), work_date=today, check_in_time=now)

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_user_and_date(int(user_id), today)
        if not record:
            raise ValidationError("You need to check in first")
        if record.is_complete:
            raise ValidationError("You have already checked out today")

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out_time=now):
            raise ValidationError("You have already checked out today")
        logger.info("user %s checked out (attendance_id=%s)", user_id, record.attendance_id)
        return AttendanceRecord(
            attendance_id=record.attendance_id,
            user_id=record.user_id,
            work_date=record.work_date,
            check_in_time=record.check_in_time,
            check_out_time=now,
        )

    def get_today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(int(user_id), today)

    def get_history(self, user_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT):
        return self._attendance.get_recent_for_user(int(user_id), int(limit))

    def list_for_date(self, work_date: date):
        return self._attendance.list_for_date(work_date)
