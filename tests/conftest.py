from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest
from werkzeug.security import generate_password_hash

from survey_payroll.attendance.model import AttendanceRecord
from survey_payroll.common.datetime_utils import month_bounds
from survey_payroll.container import assemble
from survey_payroll.core.enums import LeaveKind, RequestStatus, Role
from survey_payroll.core.exceptions import ConflictError
from survey_payroll.leave.model import LeaveRequest
from survey_payroll.payroll.model import SalaryRecord
from survey_payroll.surveys.model import PieceworkEntry, RejectionAdjustment
from survey_payroll.users.model import User

ADMIN_ID = 1
EMPLOYEE_ID = 2


def fast_hash(password: str) -> str:
    return generate_password_hash(password, method="pbkdf2:sha256:1000")


class FakeUserRepo:
    def __init__(self):
        self._users: dict[int, User] = {}
        self._next_id = 1

    def add(self, **kwargs) -> User:
        user_id = kwargs.pop("user_id", None) or self._next_id
        self._next_id = max(self._next_id, user_id + 1)
        user = User(user_id=user_id, **kwargs)
        self._users[user_id] = user
        return user

    def get_by_id(self, user_id):
        return self._users.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self._users.values() if u.username == username), None)

    def create_user(self, *, username, password_hash, full_name, email, role, phone, department, leave_balance):
        if self.get_by_username(username):
            raise ConflictError("Username already exists")
        user = self.add(
            username=username,
            password_hash=password_hash,
            full_name=full_name,
            email=email,
            role=role,
            phone=phone,
            department=department,
            leave_balance=leave_balance,
        )
        return user.user_id

    def update_user(self, user_id, *, fields):
        user = self._users.get(int(user_id))
        if not user:
            return False
        fields = dict(fields)
        if "is_active" in fields:
            fields["is_active"] = bool(fields["is_active"])
        self._users[int(user_id)] = replace(user, **fields)
        return True

    def update_leave_balance(self, user_id, new_balance):
        return self.update_user(user_id, fields={"leave_balance": int(new_balance)})

    def delete_by_id(self, user_id):
        return self._users.pop(int(user_id), None) is not None

    def list_all(self, *, role=None):
        return [u for u in self._users.values() if role is None or u.role == role]


class FakeAttendanceRepo:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._next_id = 1

    def get_recent_for_user(self, user_id, limit):
        rows = [r for r in self.records.values() if r.user_id == int(user_id)]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[:limit]

    def get_for_user_and_date(self, user_id, work_date):
        return next(
            (r for r in self.records.values() if r.user_id == int(user_id) and r.work_date == work_date),
            None,
        )

    def list_for_date(self, work_date):
        return [r for r in self.records.values() if r.work_date == work_date]

    def create_checkin(self, *, user_id, work_date, check_in_time):
        if self.get_for_user_and_date(user_id, work_date):
            raise ConflictError("Already checked in today")
        attendance_id = self._next_id
        self._next_id += 1
        self.records[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            user_id=int(user_id),
            work_date=work_date,
            check_in_time=check_in_time,
        )
        return attendance_id

    def update_checkout(self, *, attendance_id, check_out_time):
        record = self.records.get(int(attendance_id))
        if not record or record.check_out_time is not None:
            return False
        self.records[int(attendance_id)] = replace(record, check_out_time=check_out_time)
        return True


class FakeSurveyRepo:
    def __init__(self):
        self.entries: list[PieceworkEntry] = []
        self.rejections: dict[tuple, RejectionAdjustment] = {}
        self._next_entry_id = 1
        self._next_adjustment_id = 1

    def add_entry(self, user_id, work_date, category, completed):
        return self.create_entry(user_id=user_id, work_date=work_date, category=category, completed=completed)

    def get_entry(self, *, user_id, work_date, category):
        return next(
            (
                e
                for e in self.entries
                if e.user_id == int(user_id) and e.work_date == work_date and e.category == category
            ),
            None,
        )

    def create_entry(self, *, user_id, work_date, category, completed):
        if self.get_entry(user_id=user_id, work_date=work_date, category=category):
            raise ConflictError("You have already submitted this survey type today")
        entry_id = self._next_entry_id
        self._next_entry_id += 1
        self.entries.append(
            PieceworkEntry(
                entry_id=entry_id,
                user_id=int(user_id),
                work_date=work_date,
                category=category,
                completed=int(completed),
            )
        )
        return entry_id

    def list_entries_for_user(self, user_id, *, limit=200):
        rows = [e for e in self.entries if e.user_id == int(user_id)]
        return sorted(rows, key=lambda e: e.work_date, reverse=True)[:limit]

    def list_entries_for_month(self, user_id, month):
        first, last = month_bounds(month)
        return [e for e in self.entries if e.user_id == int(user_id) and first <= e.work_date <= last]

    def list_entries_for_date(self, work_date):
        return [e for e in self.entries if e.work_date == work_date]

    def list_all_entries_for_month(self, month):
        first, last = month_bounds(month)
        return [e for e in self.entries if first <= e.work_date <= last]

    def upsert_rejection(self, *, user_id, month, category, rejected, recorded_by):
        key = (int(user_id), month, category)
        existing = self.rejections.get(key)
        adjustment_id = existing.adjustment_id if existing else self._next_adjustment_id
        if not existing:
            self._next_adjustment_id += 1
        self.rejections[key] = RejectionAdjustment(
            adjustment_id=adjustment_id,
            user_id=int(user_id),
            month=month,
            category=category,
            rejected=int(rejected),
            recorded_by=recorded_by,
        )
        return self.rejections[key]

    def list_rejections_for_user(self, user_id):
        return [a for a in self.rejections.values() if a.user_id == int(user_id)]

    def list_rejections_for_month(self, month):
        return [a for a in self.rejections.values() if a.month == month]


class FakeLeaveRepo:
    def __init__(self, users: FakeUserRepo):
        self._users = users
        self.requests: dict[int, LeaveRequest] = {}
        self._next_id = 1

    def add(self, user_id, start_date, end_date, *, status=RequestStatus.PENDING, kind=LeaveKind.PERSONAL) -> int:
        request_id = self.create_leave(
            user_id=user_id,
            leave_kind=kind,
            start_date=start_date,
            end_date=end_date,
            reason="family",
        )
        if status != RequestStatus.PENDING:
            self.decide_leave(request_id=request_id, status=status, decided_by=ADMIN_ID)
        return request_id

    def create_leave(self, *, user_id, leave_kind, start_date, end_date, reason):
        request_id = self._next_id
        self._next_id += 1
        self.requests[request_id] = LeaveRequest(
            request_id=request_id,
            user_id=int(user_id),
            leave_kind=leave_kind,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=datetime(2024, 1, 2, 9, 0),
        )
        return request_id

    def get_leave(self, *, request_id):
        return self.requests.get(int(request_id))

    def list_leave_requests(self, *, status=None, user_id=None, limit=200):
        rows = [
            r
            for r in self.requests.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == int(user_id))
        ]
        return rows[:limit]

    def list_approved_for_user(self, user_id):
        return self.list_leave_requests(status=RequestStatus.APPROVED, user_id=user_id)

    def decide_leave(self, *, request_id, status, decided_by):
        req = self.requests.get(int(request_id))
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.requests[int(request_id)] = replace(
            req,
            status=status,
            decided_by=int(decided_by),
            decided_at=datetime(2024, 1, 3, 10, 0),
        )
        return True

    def approve_and_charge(self, *, request_id, decided_by, user_id, days):
        if not self.decide_leave(request_id=request_id, status=RequestStatus.APPROVED, decided_by=decided_by):
            return None
        user = self._users.get_by_id(user_id)
        if not user:
            return 0
        new_balance = max(0, user.leave_balance - int(days))
        self._users.update_leave_balance(user_id, new_balance)
        return new_balance


class FakeSalaryRepo:
    def __init__(self):
        self.records: dict[tuple, SalaryRecord] = {}
        self.upsert_calls = 0
        self._next_id = 1

    def upsert(self, *, user_id, month, breakdown, computed_by, computed_at):
        self.upsert_calls += 1
        key = (int(user_id), month)
        existing = self.records.get(key)
        salary_id = existing.salary_id if existing else self._next_id
        if not existing:
            self._next_id += 1
        self.records[key] = SalaryRecord(
            salary_id=salary_id,
            user_id=int(user_id),
            month=month,
            gross_pay=breakdown.gross_pay,
            rejection_deduction=breakdown.rejection_deduction,
            leave_deduction=breakdown.leave_deduction,
            final_pay=breakdown.final_pay,
            breakdown=dict(breakdown.categories),
            computed_by=int(computed_by),
            computed_at=computed_at,
        )
        return self.records[key]

    def get_for_user_and_month(self, user_id, month):
        return self.records.get((int(user_id), month))

    def list_for_month(self, month):
        return [r for (_, m), r in sorted(self.records.items()) if m == month]


@pytest.fixture
def users_repo():
    repo = FakeUserRepo()
    repo.add(
        user_id=ADMIN_ID,
        username="admin",
        password_hash=fast_hash("admin123"),
        full_name="Admin",
        email="admin@example.com",
        role=Role.ADMIN,
    )
    repo.add(
        user_id=EMPLOYEE_ID,
        username="employee",
        password_hash=fast_hash("employee123"),
        full_name="Test Employee",
        email="employee@example.com",
        role=Role.EMPLOYEE,
        department="Surveys",
        leave_balance=12,
    )
    return repo


@pytest.fixture
def attendance_repo():
    return FakeAttendanceRepo()


@pytest.fixture
def surveys_repo():
    return FakeSurveyRepo()


@pytest.fixture
def leave_repo(users_repo):
    return FakeLeaveRepo(users_repo)


@pytest.fixture
def salaries_repo():
    return FakeSalaryRepo()


@pytest.fixture
def container(users_repo, attendance_repo, surveys_repo, leave_repo, salaries_repo):
    return assemble(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        surveys_repo=surveys_repo,
        leave_repo=leave_repo,
        salaries_repo=salaries_repo,
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 15, 8, 30)

