from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import SalaryBreakdown, SalaryRecord


class SalaryRepository(Protocol):
    def upsert(
        self,
        *,
        user_id: int,
        month: str,
        breakdown: SalaryBreakdown,
        computed_by: int,
        computed_at: datetime,
    ) -> SalaryRecord:
        """Insert or overwrite the single record for (user_id, month)."""

        raise NotImplementedError

    def get_for_user_and_month(self, user_id: int, month: str) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_for_month(self, month: str) -> Sequence[SalaryRecord]:
        raise NotImplementedError
