from __future__ import annotations

import calendar
import re
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError

_MONTH_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (YYYY-MM-DD): {value!r}")


def parse_month(value: str) -> str:
    """Validate a YYYY-MM month string and return it normalized."""
    v = (value or "").strip()
    if not _MONTH_RE.match(v):
        raise ValidationError(f"Invalid month (YYYY-MM): {value!r}")
    return v


def month_bounds(month: str) -> tuple[date, date]:
    """First and last calendar day of a YYYY-MM month (leap years included)."""
    month = parse_month(month)
    year, mon = int(month[:4]), int(month[5:7])
    last_day = calendar.monthrange(year, mon)[1]
    return date(year, mon, 1), date(year, mon, last_day)


def month_of(day: date) -> str:
    return day.strftime("%Y-%m")


def inclusive_days(start: date, end: date) -> int:
    """Number of calendar days in [start, end], both ends included."""
    if end < start:
        return 0
    return (end - start).days + 1


def clipped_days(start: date, end: date, window_start: date, window_end: date) -> int:
    """Inclusive day count of [start, end] ∩ [window_start, window_end]."""
    return inclusive_days(max(start, window_start), min(end, window_end))


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def current_month(today: Optional[date] = None) -> str:
    return month_of(today or now_local().date())
