from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """User repository interface.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update_user(self, user_id: int, *, fields: dict) -> bool:
        """Update the given columns only; unknown keys are rejected by the implementation."""

        raise NotImplementedError

    def update_leave_balance(self, user_id: int, new_balance: int) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_all(self, *, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError
