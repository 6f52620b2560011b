from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(row: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        check_in_time=row["check_in_time"],
        check_out_time=row.get("check_out_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, check_in_time, check_out_time
                FROM attendance
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, check_in_time, check_out_time
                FROM attendance
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, user_id, work_date, check_in_time, check_out_time
                FROM attendance
                WHERE work_date=%s
                ORDER BY check_in_time
                """,
                (work_date,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_checkin(self, *, user_id: int, work_date: date, check_in_time: datetime) -> int:
        with unique_violation_as_conflict("Already checked in today"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance(user_id, work_date, check_in_time)
                    VALUES(%s,%s,%s)
                    """,
                    (int(user_id), work_date, check_in_time),
                )
                return int(cur.lastrowid)

    def update_checkout(self, *, attendance_id: int, check_out_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, int(attendance_id)),
            )
            return cur.rowcount > 0
