from datetime import date

import pytest

from survey_payroll.core.enums import Role, SurveyCategory
from survey_payroll.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError

ADMIN_ID = 1
EMPLOYEE_ID = 2
DAY = date(2024, 1, 15)


def test_submit_piecework(container, surveys_repo):
    entry = container.survey_service.submit_piecework(
        user_id=EMPLOYEE_ID, category="YOURS", completed=12, work_date=DAY
    )

    assert entry.category == SurveyCategory.YOURS
    assert entry.completed == 12
    assert surveys_repo.get_entry(user_id=EMPLOYEE_ID, work_date=DAY, category=SurveyCategory.YOURS) is not None


def test_zero_units_are_accepted(container):
    entry = container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="ssi", completed=0, work_date=DAY)
    assert entry.completed == 0


@pytest.mark.parametrize("completed", [-1, "abc", None, 2.5, True])
def test_invalid_unit_counts_are_rejected(container, completed):
    with pytest.raises(ValidationError):
        container.survey_service.submit_piecework(
            user_id=EMPLOYEE_ID, category="ssi", completed=completed, work_date=DAY
        )


def test_unknown_category_is_rejected(container):
    with pytest.raises(ValidationError):
        container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="toluna", completed=1, work_date=DAY)


def test_second_submission_same_day_conflicts(container):
    container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="dynata", completed=3, work_date=DAY)

    with pytest.raises(ConflictError):
        container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="dynata", completed=5, work_date=DAY)

    # different category, same day is fine
    container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="ssi", completed=5, work_date=DAY)


def test_today_summary_lists_every_category(container):
    container.survey_service.submit_piecework(user_id=EMPLOYEE_ID, category="yours", completed=3, work_date=DAY)

    summary = container.survey_service.today_summary(EMPLOYEE_ID, today=DAY)

    assert set(summary) == {c.value for c in SurveyCategory}
    assert summary["yours"].completed == 3
    assert summary["dynata"] is None


def test_record_rejection_upserts(container, surveys_repo):
    svc = container.survey_service
    first = svc.record_rejection(
        current_role=Role.ADMIN, admin_user_id=ADMIN_ID, user_id=EMPLOYEE_ID, month="2024-01", category="yours", rejected=3
    )
    second = svc.record_rejection(
        current_role=Role.ADMIN, admin_user_id=ADMIN_ID, user_id=EMPLOYEE_ID, month="2024-01", category="yours", rejected=5
    )

    assert second.adjustment_id == first.adjustment_id
    assert second.rejected == 5
    assert len(surveys_repo.list_rejections_for_month("2024-01")) == 1


def test_record_rejection_validation(container):
    svc = container.survey_service
    base = dict(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, month="2024-01", category="yours", rejected=1)

    with pytest.raises(AuthorizationError):
        svc.record_rejection(**{**base, "current_role": Role.EMPLOYEE}, user_id=EMPLOYEE_ID)
    with pytest.raises(NotFoundError):
        svc.record_rejection(**base, user_id=404)
    with pytest.raises(ValidationError):
        svc.record_rejection(**{**base, "month": "January"}, user_id=EMPLOYEE_ID)
    with pytest.raises(ValidationError):
        svc.record_rejection(**{**base, "rejected": -2}, user_id=EMPLOYEE_ID)
    with pytest.raises(ValidationError):
        svc.record_rejection(**base, user_id=None)


def test_month_stats(container, surveys_repo):
    surveys_repo.add_entry(EMPLOYEE_ID, date(2024, 1, 2), SurveyCategory.YOURS, 5)
    surveys_repo.add_entry(3, date(2024, 1, 2), SurveyCategory.YOURS, 7)
    surveys_repo.add_entry(EMPLOYEE_ID, date(2024, 2, 2), SurveyCategory.YOURS, 100)
    surveys_repo.upsert_rejection(
        user_id=EMPLOYEE_ID, month="2024-01", category=SurveyCategory.YOURS, rejected=2, recorded_by=ADMIN_ID
    )

    stats = container.survey_service.month_stats("2024-01")

    assert stats["yours"] == {"completed": 12, "rejected": 2}
    assert stats["ssi"] == {"completed": 0, "rejected": 0}
