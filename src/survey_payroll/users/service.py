from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty, require_non_negative_int
from ..core.constants import DEFAULT_LEAVE_BALANCE, MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid username or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid username or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, role=user.role)


class UserService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository, *, default_leave_balance: int = DEFAULT_LEAVE_BALANCE):
        self._users = users
        self._default_leave_balance = int(default_leave_balance)

    def get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def register_employee(
        self,
        *,
        username: str,
        password: str,
        full_name: str,
        email: str,
        phone: Optional[str] = None,
        department: Optional[str] = None,
        leave_balance: Optional[int] = None,
    ) -> int:
        username = require_non_empty(username, "Username")
        full_name = require_non_empty(full_name, "Full name")
        email = require_non_empty(email, "Email")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        balance = self._default_leave_balance
        if leave_balance is not None:
            balance = require_non_negative_int(leave_balance, "Leave balance")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            full_name=full_name,
            email=email,
            role=Role.EMPLOYEE,
            phone=(phone or "").strip() or None,
            department=(department or "").strip() or None,
            leave_balance=balance,
        )
        logger.info("employee %s registered (user_id=%s)", username, user_id)
        return user_id

    def list_employees(self):
        return self._users.list_all(role=Role.EMPLOYEE)

    def update_employee(self, user_id: int, changes: dict[str, Any]) -> User:
        self.get_user(user_id)

        fields: dict[str, Any] = {}
        if "full_name" in changes:
            fields["full_name"] = require_non_empty(changes["full_name"], "Full name")
        if "email" in changes:
            fields["email"] = require_non_empty(changes["email"], "Email")
        if "phone" in changes:
            fields["phone"] = (changes["phone"] or "").strip() or None
        if "department" in changes:
            fields["department"] = (changes["department"] or "").strip() or None
        if "is_active" in changes:
            fields["is_active"] = 1 if changes["is_active"] else 0
        balance = None
        if "leave_balance" in changes:
            balance = require_non_negative_int(changes["leave_balance"], "Leave balance")
        if changes.get("password"):
            require_min_length(changes["password"], "Password", MIN_PASSWORD_LENGTH)
            fields["password_hash"] = generate_password_hash(changes["password"])

        if fields:
            self._users.update_user(int(user_id), fields=fields)
        if balance is not None:
            self._users.update_leave_balance(int(user_id), balance)
            logger.info("leave balance of user %s set to %s", user_id, balance)
        return self.get_user(user_id)

    def delete_employee(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        user = self.get_user(user_id)
        if user.role == Role.ADMIN:
            raise AuthorizationError("Cannot delete admin users")

        if not self._users.delete_by_id(int(user_id)):
            raise NotFoundError("Employee not found")
        logger.info("employee %s deleted", user_id)
