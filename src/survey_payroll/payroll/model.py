from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Mapping


@dataclass
class CategoryBreakdown:
    """Per-category line of a salary: what was earned and what was taken back."""

    rate: int
    completed: int = 0
    amount: int = 0
    rejected: int = 0
    deduction: int = 0

    @classmethod
    def from_dict(cls, data: Mapping) -> "CategoryBreakdown":
        return cls(
            rate=int(data.get("rate", 0)),
            completed=int(data.get("completed", 0)),
            amount=int(data.get("amount", 0)),
            rejected=int(data.get("rejected", 0)),
            deduction=int(data.get("deduction", 0)),
        )


@dataclass(frozen=True)
class SalaryBreakdown:
    """Result of a payroll calculation, before it is persisted."""

    gross_pay: int
    rejection_deduction: int
    leave_days: int
    leave_deduction: int
    final_pay: int
    categories: dict[str, CategoryBreakdown] = field(default_factory=dict)

    def breakdown_dict(self) -> dict[str, dict]:
        return {name: asdict(line) for name, line in self.categories.items()}


@dataclass(frozen=True)
class SalaryRecord:
    salary_id: int
    user_id: int
    month: str
    gross_pay: int
    rejection_deduction: int
    leave_deduction: int
    final_pay: int
    breakdown: dict[str, CategoryBreakdown]
    computed_by: int
    computed_at: datetime

    def to_dict(self) -> dict:
        return {
            "salary_id": self.salary_id,
            "user_id": self.user_id,
            "month": self.month,
            "gross_pay": self.gross_pay,
            "rejection_deduction": self.rejection_deduction,
            "leave_deduction": self.leave_deduction,
            "final_pay": self.final_pay,
            "breakdown": {name: asdict(line) for name, line in self.breakdown.items()},
            "computed_by": self.computed_by,
            "computed_at": self.computed_at.isoformat(timespec="seconds"),
        }
