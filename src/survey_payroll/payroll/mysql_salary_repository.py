from __future__ import annotations

import json
from datetime import datetime
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, load_json_column
from .model import CategoryBreakdown, SalaryBreakdown, SalaryRecord
from .repository import SalaryRepository

_COLUMNS = (
    "salary_id, user_id, month, gross_pay, rejection_deduction, leave_deduction, "
    "final_pay, breakdown, computed_by, computed_at"
)


def _to_record(row: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(row["salary_id"]),
        user_id=int(row["user_id"]),
        month=row["month"],
        gross_pay=int(row["gross_pay"]),
        rejection_deduction=int(row["rejection_deduction"]),
        leave_deduction=int(row["leave_deduction"]),
        final_pay=int(row["final_pay"]),
        breakdown={
            name: CategoryBreakdown.from_dict(line) for name, line in load_json_column(row.get("breakdown")).items()
        },
        computed_by=int(row["computed_by"]),
        computed_at=row["computed_at"],
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(
        self,
        *,
        user_id: int,
        month: str,
        breakdown: SalaryBreakdown,
        computed_by: int,
        computed_at: datetime,
    ) -> SalaryRecord:
        # Single statement keyed on UNIQUE(user_id, month); concurrent writers: last one wins.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries(
                    user_id, month, gross_pay, rejection_deduction, leave_deduction,
                    final_pay, breakdown, computed_by, computed_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    gross_pay=VALUES(gross_pay),
                    rejection_deduction=VALUES(rejection_deduction),
                    leave_deduction=VALUES(leave_deduction),
                    final_pay=VALUES(final_pay),
                    breakdown=VALUES(breakdown),
                    computed_by=VALUES(computed_by),
                    computed_at=VALUES(computed_at)
                """,
                (
                    int(user_id),
                    month,
                    breakdown.gross_pay,
                    breakdown.rejection_deduction,
                    breakdown.leave_deduction,
                    breakdown.final_pay,
                    json.dumps(breakdown.breakdown_dict()),
                    int(computed_by),
                    computed_at,
                ),
            )
            cur.execute(
                f"SELECT {_COLUMNS} FROM salaries WHERE user_id=%s AND month=%s",
                (int(user_id), month),
            )
            return _to_record(fetchone(cur))

    def get_for_user_and_month(self, user_id: int, month: str) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM salaries WHERE user_id=%s AND month=%s",
                (int(user_id), month),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def list_for_month(self, month: str) -> Sequence[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM salaries WHERE month=%s ORDER BY user_id", (month,))
            return [_to_record(r) for r in fetchall(cur)]
