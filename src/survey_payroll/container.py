from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_LEAVE_BALANCE
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .leave.counter import LeaveDayCounter
from .leave.mysql_leave_repository import MySQLLeaveRepository
from .leave.repository import LeaveRepository
from .leave.service import LeaveService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryService
from .surveys.mysql_survey_repository import MySQLSurveyRepository
from .surveys.rates import RateTable
from .surveys.repository import SurveyRepository
from .surveys.service import SurveyService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    rates: RateTable

    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    surveys_repo: SurveyRepository
    leave_repo: LeaveRepository
    salaries_repo: SalaryRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    survey_service: SurveyService
    leave_service: LeaveService
    leave_day_counter: LeaveDayCounter
    salary_service: SalaryService
    dashboard_service: DashboardService


def assemble(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    surveys_repo: SurveyRepository,
    leave_repo: LeaveRepository,
    salaries_repo: SalaryRepository,
    rates: Optional[RateTable] = None,
    default_leave_balance: int = DEFAULT_LEAVE_BALANCE,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over any set of repositories (MySQL in the app, in-memory fakes in tests)."""
    rates = rates or RateTable()

    survey_service = SurveyService(surveys_repo, users_repo, rates=rates)
    leave_day_counter = LeaveDayCounter(leave_repo)

    return Container(
        conn=conn,
        rates=rates,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        surveys_repo=surveys_repo,
        leave_repo=leave_repo,
        salaries_repo=salaries_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo, default_leave_balance=default_leave_balance),
        attendance_service=AttendanceService(attendance_repo, users_repo),
        survey_service=survey_service,
        leave_service=LeaveService(leave_repo),
        leave_day_counter=leave_day_counter,
        salary_service=SalaryService(
            users_repo,
            surveys_repo,
            leave_day_counter,
            salaries_repo,
            calculator=StandardPayrollCalculator(rates),
        ),
        dashboard_service=DashboardService(users_repo, attendance_repo, leave_repo, surveys_repo, survey_service),
    )


def build_container(
    *,
    db_config: dict,
    survey_rates: Optional[Mapping[str, int]] = None,
    default_leave_balance: int = DEFAULT_LEAVE_BALANCE,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return assemble(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        surveys_repo=MySQLSurveyRepository(conn),
        leave_repo=MySQLLeaveRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        rates=RateTable.from_settings(survey_rates),
        default_leave_balance=default_leave_balance,
        conn=conn,
    )
