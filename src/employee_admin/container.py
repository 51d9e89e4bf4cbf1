from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .audit.mysql_activity_repository import MySQLActivityLogRepository
from .audit.repository import ActivityLogRepository
from .audit.service import ActivityLogService, AuditLog
from .biodata.mysql_biodata_repository import MySQLBiodataRepository
from .biodata.repository import BiodataRepository
from .biodata.service import BiodataService
from .database.connection import DBConfig, DatabaseConnection
from .holidays.mysql_holiday_repository import MySQLHolidayRepository
from .holidays.repository import HolidayRepository
from .holidays.service import HolidayService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_salary_repository import MySQLSalaryRepository
from .payroll.repository import SalaryRepository
from .payroll.service import SalaryService
from .requests.mysql_request_repository import MySQLRequestRepository
from .requests.repository import RequestRepository
from .requests.service import RequestService
from .roles.mysql_role_repository import MySQLRoleRepository
from .roles.repository import RoleRepository
from .roles.service import RoleService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    roles_repo: RoleRepository
    activity_repo: ActivityLogRepository
    leaves_repo: LeaveRepository
    biodata_repo: BiodataRepository
    salaries_repo: SalaryRepository
    holidays_repo: HolidayRepository
    requests_repo: RequestRepository

    audit_log: AuditLog
    activity_log_service: ActivityLogService
    role_service: RoleService
    auth_service: AuthService
    user_service: UserService
    leave_service: LeaveService
    biodata_service: BiodataService
    salary_service: SalaryService
    holiday_service: HolidayService
    request_service: RequestService


def wire_container(
    *,
    users_repo: UserRepository,
    roles_repo: RoleRepository,
    activity_repo: ActivityLogRepository,
    leaves_repo: LeaveRepository,
    biodata_repo: BiodataRepository,
    salaries_repo: SalaryRepository,
    holidays_repo: HolidayRepository,
    requests_repo: RequestRepository,
    conn: Optional[DatabaseConnection] = None,
    audit_executor: Optional[Executor] = None,
    require_email_verification: bool = False,
) -> Container:
    """Build the services on top of any set of repositories (MySQL or in-memory)."""
    audit_log = AuditLog(activity_repo, executor=audit_executor)
    role_service = RoleService(roles_repo, users_repo, audit_log)

    return Container(
        conn=conn,
        users_repo=users_repo,
        roles_repo=roles_repo,
        activity_repo=activity_repo,
        leaves_repo=leaves_repo,
        biodata_repo=biodata_repo,
        salaries_repo=salaries_repo,
        holidays_repo=holidays_repo,
        requests_repo=requests_repo,
        audit_log=audit_log,
        activity_log_service=ActivityLogService(activity_repo),
        role_service=role_service,
        auth_service=AuthService(
            users_repo,
            role_service,
            audit_log,
            require_email_verification=require_email_verification,
        ),
        user_service=UserService(users_repo, role_service, audit_log),
        leave_service=LeaveService(leaves_repo, audit_log),
        biodata_service=BiodataService(biodata_repo, audit_log),
        salary_service=SalaryService(salaries_repo, users_repo, audit_log),
        holiday_service=HolidayService(holidays_repo, audit_log),
        request_service=RequestService(requests_repo, audit_log),
    )


def build_container(
    *,
    db_config: dict,
    audit_workers: int = 0,
    require_email_verification: bool = False,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    executor = None
    if audit_workers > 0:
        executor = ThreadPoolExecutor(max_workers=int(audit_workers), thread_name_prefix="audit-log")

    return wire_container(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        roles_repo=MySQLRoleRepository(conn),
        activity_repo=MySQLActivityLogRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        biodata_repo=MySQLBiodataRepository(conn),
        salaries_repo=MySQLSalaryRepository(conn),
        holidays_repo=MySQLHolidayRepository(conn),
        requests_repo=MySQLRequestRepository(conn),
        audit_executor=executor,
        require_email_verification=require_email_verification,
    )
