from datetime import date, datetime

from survey_payroll.core.enums import SurveyCategory

EMPLOYEE_ID = 2


def test_stats_for_day_and_month(container, surveys_repo, leave_repo):
    today = date(2024, 1, 15)
    container.attendance_service.check_in(EMPLOYEE_ID, now=datetime(2024, 1, 15, 8, 0))
    surveys_repo.add_entry(EMPLOYEE_ID, today, SurveyCategory.YOURS, 4)
    surveys_repo.add_entry(EMPLOYEE_ID, today, SurveyCategory.SSI, 6)
    surveys_repo.add_entry(EMPLOYEE_ID, date(2024, 1, 14), SurveyCategory.SSI, 1)
    leave_repo.add(EMPLOYEE_ID, date(2024, 1, 20), date(2024, 1, 21))

    stats = container.dashboard_service.stats(month="2024-01", today=today)

    assert stats["total_employees"] == 1
    assert stats["present_today"] == 1
    assert stats["pending_leaves"] == 1
    assert stats["surveys_completed_today"] == 10
    assert stats["survey_stats"]["ssi"]["completed"] == 7
