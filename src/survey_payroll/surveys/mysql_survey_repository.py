from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import month_bounds
from ..core.enums import SurveyCategory
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import PieceworkEntry, RejectionAdjustment
from .repository import SurveyRepository


def _to_entry(row: dict) -> PieceworkEntry:
    return PieceworkEntry(
        entry_id=int(row["entry_id"]),
        user_id=int(row["user_id"]),
        work_date=row["work_date"],
        category=SurveyCategory(row["category"]),
        completed=int(row["completed"]),
    )


def _to_adjustment(row: dict) -> RejectionAdjustment:
    return RejectionAdjustment(
        adjustment_id=int(row["adjustment_id"]),
        user_id=int(row["user_id"]),
        month=row["month"],
        category=SurveyCategory(row["category"]),
        rejected=int(row["rejected"]),
        recorded_by=row.get("recorded_by"),
    )


class MySQLSurveyRepository(SurveyRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    # -------- Piecework --------
    def get_entry(self, *, user_id: int, work_date: date, category: SurveyCategory) -> Optional[PieceworkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, work_date, category, completed
                FROM survey_work
                WHERE user_id=%s AND work_date=%s AND category=%s
                """,
                (int(user_id), work_date, category.value),
            )
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def create_entry(self, *, user_id: int, work_date: date, category: SurveyCategory, completed: int) -> int:
        with unique_violation_as_conflict("You have already submitted this survey type today"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO survey_work(user_id, work_date, category, completed)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (int(user_id), work_date, category.value, int(completed)),
                )
                return int(cur.lastrowid)

    def list_entries_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[PieceworkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, work_date, category, completed
                FROM survey_work
                WHERE user_id=%s
                ORDER BY work_date DESC, category
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_entries_for_month(self, user_id: int, month: str) -> Sequence[PieceworkEntry]:
        first, last = month_bounds(month)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, work_date, category, completed
                FROM survey_work
                WHERE user_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date
                """,
                (int(user_id), first, last),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_entries_for_date(self, work_date: date) -> Sequence[PieceworkEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, work_date, category, completed
                FROM survey_work
                WHERE work_date=%s
                ORDER BY user_id, category
                """,
                (work_date,),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_all_entries_for_month(self, month: str) -> Sequence[PieceworkEntry]:
        first, last = month_bounds(month)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, user_id, work_date, category, completed
                FROM survey_work
                WHERE work_date BETWEEN %s AND %s
                """,
                (first, last),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    # -------- Rejections --------
    def upsert_rejection(
        self,
        *,
        user_id: int,
        month: str,
        category: SurveyCategory,
        rejected: int,
        recorded_by: int,
    ) -> RejectionAdjustment:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO rejected_surveys(user_id, month, category, rejected, recorded_by)
                VALUES(%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE rejected=VALUES(rejected), recorded_by=VALUES(recorded_by)
                """,
                (int(user_id), month, category.value, int(rejected), int(recorded_by)),
            )
            cur.execute(
                """
                SELECT adjustment_id, user_id, month, category, rejected, recorded_by
                FROM rejected_surveys
                WHERE user_id=%s AND month=%s AND category=%s
                """,
                (int(user_id), month, category.value),
            )
            return _to_adjustment(fetchone(cur))

    def list_rejections_for_user(self, user_id: int) -> Sequence[RejectionAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT adjustment_id, user_id, month, category, rejected, recorded_by
                FROM rejected_surveys
                WHERE user_id=%s
                ORDER BY month DESC, category
                """,
                (int(user_id),),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]

    def list_rejections_for_month(self, month: str) -> Sequence[RejectionAdjustment]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT adjustment_id, user_id, month, category, rejected, recorded_by
                FROM rejected_surveys
                WHERE month=%s
                ORDER BY user_id, category
                """,
                (month,),
            )
            return [_to_adjustment(r) for r in fetchall(cur)]
