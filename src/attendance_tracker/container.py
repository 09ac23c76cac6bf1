from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .access.policy import AccessPolicy
from .access.service import AccessService
from .attendance.memory_attendance_repository import InMemoryAttendanceRepository
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.memory_audit_repository import InMemoryAuditLogRepository
from .audit.mysql_audit_repository import MySQLAuditLogRepository
from .audit.repository import AuditLogRepository
from .classes.memory_class_repository import (
    InMemoryClassRepository,
    InMemorySubstituteAssignmentRepository,
    InMemoryTermRepository,
)
from .classes.mysql_class_repository import (
    MySQLClassRepository,
    MySQLSubstituteAssignmentRepository,
    MySQLTermRepository,
)
from .classes.repository import ClassRepository, SubstituteAssignmentRepository, TermRepository
from .core.constants import AT_RISK_THRESHOLD, CRITICAL_THRESHOLD
from .database.connection import DBConfig, DatabaseConnection
from .database.demo_data import seed_memory_store
from .reports.service import ReportService
from .risk.service import RiskService
from .students.memory_student_repository import InMemoryStudentRepository
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .users.memory_user_repository import InMemoryUserRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    terms: TermRepository
    classes: ClassRepository
    assignments: SubstituteAssignmentRepository
    students: StudentRepository
    attendance: AttendanceRepository
    audit: AuditLogRepository


@dataclass(frozen=True)
class Container:
    repos: Repositories

    access_service: AccessService
    attendance_service: AttendanceService
    risk_service: RiskService
    report_service: ReportService


def memory_repositories(*, seed_demo: bool = False) -> Repositories:
    repos = Repositories(
        users=InMemoryUserRepository(),
        terms=InMemoryTermRepository(),
        classes=InMemoryClassRepository(),
        assignments=InMemorySubstituteAssignmentRepository(),
        students=InMemoryStudentRepository(),
        attendance=InMemoryAttendanceRepository(),
        audit=InMemoryAuditLogRepository(),
    )
    if seed_demo:
        seed_memory_store(
            users=repos.users,
            terms=repos.terms,
            classes=repos.classes,
            assignments=repos.assignments,
            students=repos.students,
            attendance=repos.attendance,
        )
    return repos


def mysql_repositories(db_config: dict) -> Repositories:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return Repositories(
        users=MySQLUserRepository(conn),
        terms=MySQLTermRepository(conn),
        classes=MySQLClassRepository(conn),
        assignments=MySQLSubstituteAssignmentRepository(conn),
        students=MySQLStudentRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        audit=MySQLAuditLogRepository(conn),
    )


def build_container(
    repos: Repositories,
    *,
    at_risk_threshold: int = AT_RISK_THRESHOLD,
    critical_threshold: int = CRITICAL_THRESHOLD,
    policy: AccessPolicy | None = None,
) -> Container:
    access_service = AccessService(repos.users, repos.classes, repos.assignments, policy=policy)
    attendance_service = AttendanceService(
        repos.attendance,
        repos.students,
        repos.classes,
        access_service,
        repos.audit,
    )
    risk_service = RiskService(
        repos.attendance,
        repos.students,
        repos.classes,
        access_service,
        threshold=at_risk_threshold,
        critical_threshold=critical_threshold,
    )
    report_service = ReportService(
        repos.attendance,
        repos.students,
        repos.classes,
        repos.terms,
        access_service,
        repos.audit,
    )

    return Container(
        repos=repos,
        access_service=access_service,
        attendance_service=attendance_service,
        risk_service=risk_service,
        report_service=report_service,
    )


def build_container_from_settings(settings: Any) -> Container:
    backend = str(getattr(settings, "STORE_BACKEND", "memory")).lower()
    if backend == "mysql":
        repos = mysql_repositories(getattr(settings, "DB_CONFIG"))
    elif backend == "memory":
        repos = memory_repositories(seed_demo=bool(getattr(settings, "SEED_DEMO_DATA", False)))
    else:
        raise ValueError(f"Unknown STORE_BACKEND {backend!r} (expected 'memory' or 'mysql')")

    policy = AccessPolicy(
        require_active_flag=bool(getattr(settings, "SUBSTITUTE_REQUIRE_ACTIVE", True)),
        check_date_range=bool(getattr(settings, "SUBSTITUTE_CHECK_DATE_RANGE", False)),
    )
    return build_container(
        repos,
        at_risk_threshold=int(getattr(settings, "AT_RISK_THRESHOLD", AT_RISK_THRESHOLD)),
        critical_threshold=int(getattr(settings, "CRITICAL_THRESHOLD", CRITICAL_THRESHOLD)),
        policy=policy,
    )
