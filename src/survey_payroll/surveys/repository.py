from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import SurveyCategory
from .model import PieceworkEntry, RejectionAdjustment


class SurveyRepository(Protocol):
    # Piecework
    def get_entry(self, *, user_id: int, work_date: date, category: SurveyCategory) -> Optional[PieceworkEntry]:
        raise NotImplementedError

    def create_entry(self, *, user_id: int, work_date: date, category: SurveyCategory, completed: int) -> int:
        """Insert one entry; a duplicate (user, date, category) raises ConflictError."""

        raise NotImplementedError

    def list_entries_for_user(self, user_id: int, *, limit: int = 200) -> Sequence[PieceworkEntry]:
        raise NotImplementedError

    def list_entries_for_month(self, user_id: int, month: str) -> Sequence[PieceworkEntry]:
        raise NotImplementedError

    def list_entries_for_date(self, work_date: date) -> Sequence[PieceworkEntry]:
        raise NotImplementedError

    def list_all_entries_for_month(self, month: str) -> Sequence[PieceworkEntry]:
        raise NotImplementedError

    # Rejections
    def upsert_rejection(
        self,
        *,
        user_id: int,
        month: str,
        category: SurveyCategory,
        rejected: int,
        recorded_by: int,
    ) -> RejectionAdjustment:
        raise NotImplementedError

    def list_rejections_for_user(self, user_id: int) -> Sequence[RejectionAdjustment]:
        raise NotImplementedError

    def list_rejections_for_month(self, month: str) -> Sequence[RejectionAdjustment]:
        raise NotImplementedError
