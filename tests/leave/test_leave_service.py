from datetime import date

import pytest

from survey_payroll.core.enums import LeaveKind, RequestStatus, Role
from survey_payroll.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from survey_payroll.leave.service import LeaveService

ADMIN_ID = 1
EMPLOYEE_ID = 2


@pytest.fixture
def service(leave_repo):
    return LeaveService(leave_repo)


def _file(service, start, end):
    return service.create_leave(
        current_role=Role.EMPLOYEE,
        user_id=EMPLOYEE_ID,
        leave_kind="Vacation",
        start_date=start,
        end_date=end,
        reason="trip",
    )


def test_create_leave_starts_pending(service, leave_repo):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 6))

    req = leave_repo.get_leave(request_id=rid)
    assert req.status == RequestStatus.PENDING
    assert req.leave_kind == LeaveKind.VACATION
    assert req.day_count == 3


def test_create_leave_validates_input(service):
    with pytest.raises(ValidationError):
        _file(service, date(2024, 3, 6), date(2024, 3, 4))
    with pytest.raises(ValidationError):
        service.create_leave(
            current_role=Role.EMPLOYEE,
            user_id=EMPLOYEE_ID,
            leave_kind="holiday",
            start_date=date(2024, 3, 4),
            end_date=date(2024, 3, 4),
            reason="x",
        )
    with pytest.raises(AuthorizationError):
        service.create_leave(
            current_role=Role.ADMIN,
            user_id=ADMIN_ID,
            leave_kind="personal",
            start_date=date(2024, 3, 4),
            end_date=date(2024, 3, 4),
            reason="x",
        )


def test_approve_decrements_balance(service, users_repo):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 6))

    new_balance = service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid)

    assert new_balance == 9
    assert users_repo.get_by_id(EMPLOYEE_ID).leave_balance == 9


def test_approve_floors_balance_at_zero(service, users_repo):
    users_repo.update_leave_balance(EMPLOYEE_ID, 2)
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 6))

    assert service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid) == 0
    assert users_repo.get_by_id(EMPLOYEE_ID).leave_balance == 0


def test_reject_leaves_balance_untouched(service, users_repo, leave_repo):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 6))

    service.reject_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid)

    assert leave_repo.get_leave(request_id=rid).status == RequestStatus.REJECTED
    assert users_repo.get_by_id(EMPLOYEE_ID).leave_balance == 12


def test_decided_request_cannot_be_decided_again(service, users_repo):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 4))
    service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid)

    with pytest.raises(ConflictError):
        service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid)
    with pytest.raises(ConflictError):
        service.reject_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid)

    # charged once only
    assert users_repo.get_by_id(EMPLOYEE_ID).leave_balance == 11


def test_unknown_request_is_not_found(service):
    with pytest.raises(NotFoundError):
        service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=404)


def test_only_admin_can_decide(service):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 4))
    with pytest.raises(AuthorizationError):
        service.approve_leave(current_role=Role.EMPLOYEE, admin_user_id=EMPLOYEE_ID, request_id=rid)


def test_decide_dispatches_on_status(service):
    rid = _file(service, date(2024, 3, 4), date(2024, 3, 4))

    decided = service.decide(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=rid, status="rejected")
    assert decided.status == RequestStatus.REJECTED
    assert decided.decided_by == ADMIN_ID

    other = _file(service, date(2024, 3, 5), date(2024, 3, 5))
    with pytest.raises(ValidationError):
        service.decide(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=other, status="pending")


def test_list_pending_excludes_decided(service):
    first = _file(service, date(2024, 3, 4), date(2024, 3, 4))
    _file(service, date(2024, 3, 5), date(2024, 3, 5))
    service.reject_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=first)

    pending = service.list_pending()
    assert [r.start_date for r in pending] == [date(2024, 3, 5)]


def test_approving_two_requests_charges_both(service, users_repo):
    first = _file(service, date(2024, 3, 4), date(2024, 3, 6))
    second = _file(service, date(2024, 4, 1), date(2024, 4, 2))

    service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=first)
    assert service.approve_leave(current_role=Role.ADMIN, admin_user_id=ADMIN_ID, request_id=second) == 7
    assert users_repo.get_by_id(EMPLOYEE_ID).leave_balance == 7
