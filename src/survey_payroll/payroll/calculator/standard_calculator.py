from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from ...core.constants import LEAVE_DEDUCTION_DIVISOR
from ...surveys.model import PieceworkEntry, RejectionAdjustment
from ...surveys.rates import RateTable
from ..model import CategoryBreakdown, SalaryBreakdown
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: piecework pay, minus rejected units, minus gross/30 per leave day.

    `final_pay` is not floored; heavy deductions can make it negative.
    """

    def __init__(self, rates: Optional[RateTable] = None, *, leave_divisor: int = LEAVE_DEDUCTION_DIVISOR):
        self._rates = rates or RateTable()
        self._leave_divisor = int(leave_divisor)

    def leave_deduction(self, gross_pay: int, leave_days: int) -> int:
        # Half-units round up (2.5 -> 3), not to even.
        value = Decimal(gross_pay) * Decimal(leave_days) / Decimal(self._leave_divisor)
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    def calculate(
        self,
        *,
        month: str,
        entries: Iterable[PieceworkEntry],
        adjustments: Iterable[RejectionAdjustment],
        leave_days: int,
    ) -> SalaryBreakdown:
        lines = {category.value: CategoryBreakdown(rate=self._rates.rate_for(category)) for category in self._rates}

        gross_pay = 0
        for entry in entries:
            line = lines[entry.category.value]
            earned = entry.completed * line.rate
            line.completed += entry.completed
            line.amount += earned
            gross_pay += earned

        rejection_deduction = 0
        for adjustment in adjustments:
            if adjustment.month != month:
                continue
            line = lines[adjustment.category.value]
            # One adjustment row per (user, month, category): it sets, not adds.
            line.rejected = adjustment.rejected
            line.deduction = adjustment.rejected * line.rate
            rejection_deduction += line.deduction

        leave_deduction = self.leave_deduction(gross_pay, leave_days)

        return SalaryBreakdown(
            gross_pay=gross_pay,
            rejection_deduction=rejection_deduction,
            leave_days=int(leave_days),
            leave_deduction=leave_deduction,
            final_pay=gross_pay - (rejection_deduction + leave_deduction),
            categories=lines,
        )
