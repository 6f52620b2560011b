from datetime import date

from survey_payroll.core.enums import RequestStatus
from survey_payroll.leave.counter import LeaveDayCounter

EMPLOYEE_ID = 2


def test_leave_spanning_two_months_is_split(leave_repo):
    leave_repo.add(EMPLOYEE_ID, date(2024, 1, 28), date(2024, 2, 3), status=RequestStatus.APPROVED)
    counter = LeaveDayCounter(leave_repo)

    assert counter.count_approved_leave_days(EMPLOYEE_ID, "2024-01") == 4
    assert counter.count_approved_leave_days(EMPLOYEE_ID, "2024-02") == 3
    assert counter.count_approved_leave_days(EMPLOYEE_ID, "2024-03") == 0


def test_single_day_leave_counts_one(leave_repo):
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 10), date(2024, 5, 10), status=RequestStatus.APPROVED)

    assert LeaveDayCounter(leave_repo).count_approved_leave_days(EMPLOYEE_ID, "2024-05") == 1


def test_pending_and_rejected_are_ignored(leave_repo):
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 1), date(2024, 5, 3), status=RequestStatus.PENDING)
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 6), date(2024, 5, 7), status=RequestStatus.REJECTED)
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 20), date(2024, 5, 21), status=RequestStatus.APPROVED)

    assert LeaveDayCounter(leave_repo).count_approved_leave_days(EMPLOYEE_ID, "2024-05") == 2


def test_overlapping_requests_are_counted_independently(leave_repo):
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 1), date(2024, 5, 3), status=RequestStatus.APPROVED)
    leave_repo.add(EMPLOYEE_ID, date(2024, 5, 2), date(2024, 5, 4), status=RequestStatus.APPROVED)

    assert LeaveDayCounter(leave_repo).count_approved_leave_days(EMPLOYEE_ID, "2024-05") == 6


def test_leap_february_end_is_included(leave_repo):
    leave_repo.add(EMPLOYEE_ID, date(2024, 2, 27), date(2024, 3, 2), status=RequestStatus.APPROVED)

    assert LeaveDayCounter(leave_repo).count_approved_leave_days(EMPLOYEE_ID, "2024-02") == 3


def test_other_users_leave_is_not_counted(leave_repo):
    leave_repo.add(99, date(2024, 5, 1), date(2024, 5, 3), status=RequestStatus.APPROVED)

    assert LeaveDayCounter(leave_repo).count_approved_leave_days(EMPLOYEE_ID, "2024-05") == 0
