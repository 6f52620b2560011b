from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one day's check-in/check-out for one user."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: datetime
    check_out_time: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.check_out_time is not None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "check_in": self.check_in_time.isoformat(timespec="seconds"),
            "check_out": self.check_out_time.isoformat(timespec="seconds") if self.check_out_time else None,
        }
