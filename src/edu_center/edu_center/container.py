from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .auth.tokens import TokenService
from .core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from .courses.mysql_course_repository import MySQLCourseRepository
from .courses.repository import CourseRepository
from .courses.service import CourseService
from .database.connection import DBConfig, DatabaseConnection
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import SalaryService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    tokens: TokenService

    users_repo: UserRepository
    courses_repo: CourseRepository
    students_repo: StudentRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository

    auth_service: AuthService
    user_service: UserService
    course_service: CourseService
    student_service: StudentService
    attendance_service: AttendanceService
    salary_service: SalaryService


def assemble_container(
    *,
    tokens: TokenService,
    users_repo: UserRepository,
    courses_repo: CourseRepository,
    students_repo: StudentRepository,
    attendance_repo: AttendanceRepository,
    payroll_repo: PayrollRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in production, fakes in tests)."""
    return Container(
        conn=conn,
        tokens=tokens,
        users_repo=users_repo,
        courses_repo=courses_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        auth_service=AuthService(users_repo, tokens),
        user_service=UserService(users_repo),
        course_service=CourseService(courses_repo, users_repo),
        student_service=StudentService(students_repo, courses_repo),
        attendance_service=AttendanceService(attendance_repo),
        salary_service=SalaryService(payroll_repo),
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return assemble_container(
        conn=conn,
        tokens=TokenService(secret_key, expire_minutes=token_expire_minutes),
        users_repo=MySQLUserRepository(conn),
        courses_repo=MySQLCourseRepository(conn),
        students_repo=MySQLStudentRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
    )
