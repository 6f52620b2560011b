from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import now_local, parse_month
from ..common.validators import require_enum, require_non_negative_int, require_positive_int
from ..core.enums import Role, SurveyCategory
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError
from ..users.repository import UserRepository
from .model import PieceworkEntry, RejectionAdjustment
from .rates import RateTable
from .repository import SurveyRepository

logger = logging.getLogger(__name__)


class SurveyService:
    """Piecework submission and admin rejection bookkeeping."""

    def __init__(self, surveys: SurveyRepository, users: UserRepository, *, rates: Optional[RateTable] = None):
        self._surveys = surveys
        self._users = users
        self._rates = rates or RateTable()

    def submit_piecework(
        self,
        *,
        user_id: int,
        category: Any,
        completed: Any,
        work_date: Optional[date] = None,
    ) -> PieceworkEntry:
        category = require_enum(SurveyCategory, category, "Survey type")
        completed = require_non_negative_int(completed, "Completed")
        work_date = work_date or now_local().date()

        if self._surveys.get_entry(user_id=int(user_id), work_date=work_date, category=category):
            raise ConflictError("You have already submitted this survey type today")

        # The UNIQUE key still guards a concurrent identical submission.
        entry_id = self._surveys.create_entry(
            user_id=int(user_id),
            work_date=work_date,
            category=category,
            completed=completed,
        )
        logger.info("user %s submitted %s x%s for %s", user_id, category.value, completed, work_date)
        return PieceworkEntry(
            entry_id=entry_id,
            user_id=int(user_id),
            work_date=work_date,
            category=category,
            completed=completed,
        )

    def list_my_entries(self, user_id: int, *, limit: int = 200):
        return self._surveys.list_entries_for_user(int(user_id), limit=limit)

    def today_summary(self, user_id: int, *, today: Optional[date] = None) -> dict[str, Optional[PieceworkEntry]]:
        today = today or now_local().date()
        return {
            category.value: self._surveys.get_entry(user_id=int(user_id), work_date=today, category=category)
            for category in SurveyCategory
        }

    def list_for_date(self, work_date: date):
        return self._surveys.list_entries_for_date(work_date)

    def record_rejection(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        user_id: Any,
        month: str,
        category: Any,
        rejected: Any,
    ) -> RejectionAdjustment:
        """Set the rejected unit count for (user, month, category); a later call overwrites."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("You do not have permission")

        month = parse_month(month)
        category = require_enum(SurveyCategory, category, "Survey type")
        rejected = require_non_negative_int(rejected, "Rejected")
        user_id = require_positive_int(user_id, "User ID")

        if not self._users.get_by_id(user_id):
            raise NotFoundError("Employee not found")

        adjustment = self._surveys.upsert_rejection(
            user_id=user_id,
            month=month,
            category=category,
            rejected=rejected,
            recorded_by=int(admin_user_id),
        )
        logger.info(
            "admin %s set rejected %s=%s for user %s in %s",
            admin_user_id,
            category.value,
            rejected,
            user_id,
            month,
        )
        return adjustment

    def list_rejections(self, month: str):
        return self._surveys.list_rejections_for_month(parse_month(month))

    def month_stats(self, month: str) -> dict[str, dict[str, int]]:
        """Completed and rejected unit totals per category across all users."""
        month = parse_month(month)
        stats = {category.value: {"completed": 0, "rejected": 0} for category in self._rates}

        for entry in self._surveys.list_all_entries_for_month(month):
            if entry.category.value in stats:
                stats[entry.category.value]["completed"] += entry.completed

        for adjustment in self._surveys.list_rejections_for_month(month):
            if adjustment.category.value in stats:
                stats[adjustment.category.value]["rejected"] += adjustment.rejected

        return stats
