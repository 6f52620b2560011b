from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveKind, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = "request_id, user_id, leave_kind, start_date, end_date, reason, status, created_at, decided_by, decided_at"


def _to_leave(row: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(row["request_id"]),
        user_id=int(row["user_id"]),
        leave_kind=LeaveKind(row["leave_kind"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        reason=row["reason"],
        status=RequestStatus(row["status"]),
        created_at=row["created_at"],
        decided_by=row.get("decided_by"),
        decided_at=row.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_leave(
        self,
        *,
        user_id: int,
        leave_kind: LeaveKind,
        start_date: date,
        end_date: date,
        reason: str,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, leave_kind, start_date, end_date, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), leave_kind.value, start_date, end_date, reason, RequestStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_leave(self, *, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def list_leave_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def list_approved_for_user(self, user_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE user_id=%s AND status=%s
                ORDER BY start_date
                """,
                (int(user_id), RequestStatus.APPROVED.value),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide_leave(self, *, request_id: int, status: RequestStatus, decided_by: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=NOW()
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def approve_and_charge(self, *, request_id: int, decided_by: int, user_id: int, days: int) -> Optional[int]:
        # Status change and balance charge share one transaction; GREATEST keeps concurrent charges additive.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=NOW()
                WHERE request_id=%s AND status=%s
                """,
                (
                    RequestStatus.APPROVED.value,
                    int(decided_by),
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            if cur.rowcount == 0:
                return None

            cur.execute(
                "UPDATE users SET leave_balance=GREATEST(0, leave_balance - %s) WHERE user_id=%s",
                (int(days), int(user_id)),
            )
            cur.execute("SELECT leave_balance FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return int(row["leave_balance"]) if row else 0
