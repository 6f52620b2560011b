from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LEAVE_BALANCE
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Note: Plain data object (no DB access code).
    """

    user_id: int
    username: str
    password_hash: str
    full_name: str
    email: str
    role: Role
    phone: Optional[str] = None
    department: Optional[str] = None
    is_active: bool = True
    leave_balance: int = DEFAULT_LEAVE_BALANCE

    def public_view(self) -> dict:
        """Serializable view without the password hash."""
        return {
            "user_id": self.user_id,
            "username": self.username,
            "full_name": self.full_name,
            "email": self.email,
            "phone": self.phone,
            "role": self.role.value,
            "department": self.department,
            "is_active": self.is_active,
            "leave_balance": self.leave_balance,
        }
