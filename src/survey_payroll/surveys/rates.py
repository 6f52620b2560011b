from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

from ..core.constants import DEFAULT_SURVEY_RATES
from ..core.enums import SurveyCategory


@dataclass(frozen=True)
class RateTable:
    """Per-unit pay rate for every piecework category.

    Passed explicitly to the payroll calculator so alternate schedules can be
    swapped in from settings or tests.
    """

    rates: Mapping[SurveyCategory, int] = field(default_factory=lambda: dict(DEFAULT_SURVEY_RATES))

    def __post_init__(self):
        for category, rate in self.rates.items():
            if not isinstance(category, SurveyCategory):
                raise ValueError(f"Unknown survey category: {category!r}")
            if isinstance(rate, bool) or not isinstance(rate, int) or rate <= 0:
                raise ValueError(f"Rate for {category.value} must be a positive integer, got {rate!r}")
        missing = [c.value for c in SurveyCategory if c not in self.rates]
        if missing:
            raise ValueError(f"No rate configured for: {', '.join(missing)}")

    @classmethod
    def from_settings(cls, overrides: Optional[Mapping[str, int]] = None) -> "RateTable":
        """Default rates with optional {"yours": 30, ...} overrides from settings."""
        rates = dict(DEFAULT_SURVEY_RATES)
        for key, rate in (overrides or {}).items():
            rates[SurveyCategory(str(key).strip().lower())] = int(rate)
        return cls(rates=rates)

    def rate_for(self, category: SurveyCategory) -> int:
        return self.rates[category]

    def __iter__(self) -> Iterator[SurveyCategory]:
        return iter(self.rates)

    def as_dict(self) -> dict[str, int]:
        return {c.value: r for c, r in self.rates.items()}
