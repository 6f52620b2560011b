from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as_conflict
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, username, password_hash, full_name, email, phone, role, department, is_active, leave_balance"

_UPDATABLE = {"password_hash", "full_name", "email", "phone", "department", "is_active", "leave_balance"}


def _to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        full_name=row["full_name"],
        email=row["email"],
        role=Role(row["role"]),
        phone=row.get("phone"),
        department=row.get("department"),
        is_active=bool(row.get("is_active", True)),
        leave_balance=int(row.get("leave_balance") or 0),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def create_user(
        self,
        *,
        username: str,
        password_hash: str,
        full_name: str,
        email: str,
        role: Role,
        phone: Optional[str],
        department: Optional[str],
        leave_balance: int,
    ) -> int:
        with unique_violation_as_conflict("Username already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO users(username, password_hash, full_name, email, phone, role, department, is_active, leave_balance)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,1,%s)
                    """,
                    (username, password_hash, full_name, email, phone, role.value, department, int(leave_balance)),
                )
                return int(cur.lastrowid)

    def update_user(self, user_id: int, *, fields: dict) -> bool:
        unknown = set(fields) - _UPDATABLE
        if unknown:
            raise ValueError(f"Unsupported user columns: {sorted(unknown)}")
        if not fields:
            return False

        keys = sorted(fields)
        assignments = ", ".join(f"{k}=%s" for k in keys)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {assignments} WHERE user_id=%s",
                tuple(fields[k] for k in keys) + (int(user_id),),
            )
            return cur.rowcount > 0

    def update_leave_balance(self, user_id: int, new_balance: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET leave_balance=%s WHERE user_id=%s",
                (int(new_balance), int(user_id)),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            if role is None:
                cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY user_id DESC")
            else:
                cur.execute(f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY user_id DESC", (role.value,))
            return [_to_user(r) for r in fetchall(cur)]
