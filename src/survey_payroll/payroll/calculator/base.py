from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable

from ...surveys.model import PieceworkEntry, RejectionAdjustment
from ..model import SalaryBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        month: str,
        entries: Iterable[PieceworkEntry],
        adjustments: Iterable[RejectionAdjustment],
        leave_days: int,
    ) -> SalaryBreakdown:
        raise NotImplementedError
