from datetime import date

import pytest

from survey_payroll.common.datetime_utils import (
    clipped_days,
    current_month,
    inclusive_days,
    month_bounds,
    parse_iso_date,
    parse_month,
)
from survey_payroll.core.exceptions import ValidationError


def test_month_bounds_handles_leap_february():
    assert month_bounds("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds("2023-02") == (date(2023, 2, 1), date(2023, 2, 28))
    assert month_bounds("2024-12") == (date(2024, 12, 1), date(2024, 12, 31))


@pytest.mark.parametrize("bad", ["2024-13", "2024-1", "24-01", "", None, "2024/01"])
def test_parse_month_rejects_malformed(bad):
    with pytest.raises(ValidationError):
        parse_month(bad)


def test_parse_iso_date():
    assert parse_iso_date("2024-01-28") == date(2024, 1, 28)
    with pytest.raises(ValidationError):
        parse_iso_date("28/01/2024")


def test_inclusive_and_clipped_days():
    assert inclusive_days(date(2024, 1, 5), date(2024, 1, 5)) == 1
    assert inclusive_days(date(2024, 1, 6), date(2024, 1, 5)) == 0
    # window entirely outside the range
    assert clipped_days(date(2024, 1, 1), date(2024, 1, 3), date(2024, 2, 1), date(2024, 2, 29)) == 0


def test_current_month():
    assert current_month(date(2024, 3, 9)) == "2024-03"
