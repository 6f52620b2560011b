from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import SurveyCategory


@dataclass(frozen=True)
class PieceworkEntry:
    """Units one user completed for one category on one day."""

    entry_id: int
    user_id: int
    work_date: date
    category: SurveyCategory
    completed: int

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "user_id": self.user_id,
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "category": self.category.value,
            "completed": self.completed,
        }


@dataclass(frozen=True)
class RejectionAdjustment:
    """Admin-recorded rejected units for one user, one category, one month."""

    adjustment_id: int
    user_id: int
    month: str
    category: SurveyCategory
    rejected: int
    recorded_by: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "adjustment_id": self.adjustment_id,
            "user_id": self.user_id,
            "month": self.month,
            "category": self.category.value,
            "rejected": self.rejected,
            "recorded_by": self.recorded_by,
        }
