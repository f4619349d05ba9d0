from __future__ import annotations

from dataclasses import replace
from datetime import date, time

import pytest
from werkzeug.security import generate_password_hash

from edu_center.attendance.model import AttendanceRecord
from edu_center.auth.claims import AuthClaims
from edu_center.auth.tokens import TokenService
from edu_center.container import assemble_container
from edu_center.core.enums import Role
from edu_center.core.exceptions import CourseNotFoundError, NotFoundError, ValidationError
from edu_center.courses.model import ClassSession, Course
from edu_center.main import create_app
from edu_center.payroll.model import SalaryReportLine
from edu_center.students.model import Student
from edu_center.users.model import User

SECRET = "test-secret"


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class InMemoryUsers:
    def __init__(self, users=()):
        self.users = {u.user_id: u for u in users}
        self.calls = []

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_username(self, username):
        return next((u for u in self.users.values() if u.username == username), None)

    def find_one(self, *, username="", email="", user_id=""):
        for u in self.users.values():
            if (username and u.username == username) or (email and u.email == email) or (user_id and u.user_id == user_id):
                return u
        return None

    def exists_username_or_email(self, *, username, email):
        return any(u.username == username or u.email == email for u in self.users.values())

    def create_user(self, *, user_id, username, email, role, password_hash, full_name, gender, dob, start_date, job_position):
        self.users[user_id] = User(
            user_id=user_id,
            username=username,
            email=email,
            role=role,
            full_name=full_name,
            password_hash=password_hash,
            job_position=job_position,
            dob=dob,
            start_date=start_date,
            gender=gender,
        )
        return user_id

    def update_profile(self, *, user_id, email, dob, full_name, gender):
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = replace(user, email=email, dob=dob, full_name=full_name, gender=gender)
        return True

    def update_password(self, *, user_id, password_hash):
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = replace(user, password_hash=password_hash)
        return True

    def list_by_job_position(self, job_position):
        self.calls.append(("list_by_job_position", job_position))
        matched = [u for u in self.users.values() if u.job_position == job_position and u.is_active]
        return sorted(matched, key=lambda u: u.full_name)


class InMemoryCourses:
    def __init__(self, courses=()):
        self.courses = {c.course_id: c for c in courses}
        self.sessions = []

    def exists(self, course_id):
        return course_id in self.courses

    def get_by_id(self, course_id):
        return self.courses.get(course_id)

    def list_all(self):
        return sorted(self.courses.values(), key=lambda c: (c.start_date, c.course_id), reverse=True)

    def create_course(self, course):
        self.courses[course.course_id] = course
        return course.course_id

    def list_sessions(self, course_id):
        return [s for s in self.sessions if s.course_id == course_id]

    def create_session(self, *, course_id, teacher_id, class_date, start_time, end_time, room, note):
        class_id = len(self.sessions) + 1
        self.sessions.append(
            ClassSession(
                class_id=class_id,
                course_id=course_id,
                teacher_id=teacher_id,
                class_date=class_date,
                start_time=start_time,
                end_time=end_time,
                room=room,
                note=note,
            )
        )
        return class_id


class InMemoryStudents:
    """Mirrors the gateway contract: the course check and the inserts are one unit."""

    def __init__(self, courses: InMemoryCourses):
        self._courses = courses
        self.students = {}
        self.enrollments = []
        self.enroll_calls = 0

    def enroll_students(self, *, course_id, students):
        self.enroll_calls += 1
        if not self._courses.exists(course_id):
            raise CourseNotFoundError(course_id)

        ids = []
        for s in students:
            student_id = len(self.students) + 1
            self.students[student_id] = Student(
                student_id=student_id,
                name=s.name,
                dob=s.dob,
                email=s.email,
                phone_number=s.phone_number,
            )
            self.enrollments.append((course_id, student_id))
            ids.append(student_id)
        return ids

    def list_by_course(self, course_id):
        ids = [sid for cid, sid in self.enrollments if cid == course_id]
        return sorted((self.students[sid] for sid in ids), key=lambda s: (s.name, s.student_id))


class InMemoryAttendance:
    def __init__(self, roster=None, names=None):
        # class_id -> set of enrolled student ids
        self.roster = {cid: set(sids) for cid, sids in (roster or {}).items()}
        self.names = dict(names or {})
        self.rows = {}

    def _record(self, student_id, class_id):
        return AttendanceRecord(
            student_id=student_id,
            class_id=class_id,
            status=self.rows[(student_id, class_id)],
            student_name=self.names.get(student_id, ""),
        )

    def get(self, *, student_id, class_id):
        if (student_id, class_id) not in self.rows:
            return None
        return self._record(student_id, class_id)

    def list_for_class(self, class_id):
        return sorted(
            (self._record(sid, cid) for sid, cid in self.rows if cid == class_id),
            key=lambda r: r.student_name,
        )

    def record_marks(self, *, class_id, marks):
        if class_id not in self.roster:
            raise NotFoundError(f"Class {class_id} does not exist")
        for mark in marks:
            if mark.student_id not in self.roster[class_id]:
                raise ValidationError(f"Student {mark.student_id} is not enrolled")
        for mark in marks:
            self.rows[(mark.student_id, class_id)] = mark.status
        return len(marks)

    def update_status(self, *, student_id, class_id, status):
        if (student_id, class_id) not in self.rows:
            raise NotFoundError(f"No attendance recorded for student {student_id} in class {class_id}")
        self.rows[(student_id, class_id)] = status


class InMemoryPayroll:
    def __init__(self, lines=None, rates=None):
        # (month, year) -> [SalaryReportLine]
        self.lines = {k: list(v) for k, v in (lines or {}).items()}
        self.rates = dict(rates or {})
        self.report_calls = []
        self.update_calls = 0

    def get_salary_report(self, *, month, year, full_name=None, user_id=None):
        self.report_calls.append({"month": month, "year": year, "full_name": full_name, "user_id": user_id})
        lines = self.lines.get((month, year), [])
        if user_id is not None:
            lines = [l for l in lines if l.user_id == user_id]
        if full_name:
            lines = [l for l in lines if full_name.lower() in l.full_name.lower()]
        return sorted(lines, key=lambda l: (l.full_name, l.payroll_id))

    def update_rates(self, *, user_id, rates):
        self.update_calls += 1
        missing = [r.payroll_id for r in rates if (user_id, r.payroll_id) not in self.rates]
        if missing:
            raise NotFoundError(f"Payroll {missing[0]} is not configured for user {user_id}")
        for r in rates:
            self.rates[(user_id, r.payroll_id)] = r.payroll_amount


# ---------------------------------------------------------------------------
# Scripted MySQL connection (gateway and transaction tests)
# ---------------------------------------------------------------------------


def _normalize_sql(sql):
    return " ".join(sql.split())


class ScriptedCursor:
    def __init__(self, db):
        self._db = db
        self._rows = []
        self.rowcount = -1
        self.lastrowid = None

    def execute(self, sql, params=()):
        sql = _normalize_sql(sql)
        self._db.executed.append((sql, tuple(params)))

        result = {}
        for fragment, handler in self._db.rules:
            if fragment in sql:
                result = handler(tuple(params)) or {}
                break

        self._rows = list(result.get("rows", []))
        is_write = sql.split(" ", 1)[0].upper() in ("INSERT", "UPDATE", "DELETE")
        self.rowcount = result.get("rowcount", 1 if is_write else len(self._rows))
        if sql.upper().startswith("INSERT"):
            self.lastrowid = result.get("lastrowid", self._db.next_id())
        if is_write:
            self._db.staged.append((sql, tuple(params)))

    def fetchone(self):
        return self._rows.pop(0) if self._rows else None

    def fetchall(self):
        rows, self._rows = self._rows, []
        return rows

    def close(self):
        pass


class ScriptedConnection:
    def __init__(self, db):
        self._db = db

    def start_transaction(self):
        self._db.transactions += 1

    def cursor(self, dictionary=False):
        return ScriptedCursor(self._db)

    def commit(self):
        self._db.commits += 1
        self._db.committed.extend(self._db.staged)
        self._db.staged.clear()

    def rollback(self):
        self._db.rollbacks += 1
        self._db.staged.clear()

    def close(self):
        self._db.closed += 1


class ScriptedDB:
    """Connection factory whose statements are answered by ``on(fragment, handler)`` rules.

    Writes stay staged until commit; a rollback discards them.
    """

    def __init__(self):
        self.rules = []
        self.executed = []
        self.staged = []
        self.committed = []
        self.transactions = 0
        self.commits = 0
        self.rollbacks = 0
        self.closed = 0
        self._last_id = 100

    def on(self, fragment, handler):
        self.rules.append((fragment, handler))
        return self

    def next_id(self):
        self._last_id += 1
        return self._last_id

    def connect(self):
        return ScriptedConnection(self)

    def statements(self, verb):
        return [sql for sql, _ in self.executed if sql.upper().startswith(verb.upper())]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _user(user_id, username, role, full_name, password, job_position=None, gender=None):
    return User(
        user_id=user_id,
        username=username,
        email=f"{username}@center.test",
        role=role,
        full_name=full_name,
        password_hash=generate_password_hash(password),
        job_position=job_position,
        dob=date(1990, 1, 1),
        start_date=date(2023, 9, 1),
        gender=gender,
    )


def _line(user, payroll_id, type_payroll, work_dates, rate, salary=None):
    return SalaryReportLine(
        user_id=user.user_id,
        username=user.username,
        full_name=user.full_name,
        gender=user.gender,
        job_position=user.job_position,
        payroll_id=payroll_id,
        type_payroll=type_payroll,
        total_work_dates=work_dates,
        payroll_rate=rate,
        salary=salary,
    )


@pytest.fixture
def scripted_db():
    return ScriptedDB()


@pytest.fixture
def users_repo():
    return InMemoryUsers(
        [
            _user("u-admin", "admin", Role.ADMIN, "Center Admin", "admin123"),
            _user("u-leader", "leader", Role.LEADER, "Lan Leader", "leader123"),
            _user("u-teacher", "teacher", Role.USER, "Tom Teacher", "teacher123", job_position="Teacher", gender="Male"),
            _user("u-ta", "assistant", Role.USER, "Tina Assistant", "assistant123", job_position="TA", gender="Female"),
        ]
    )


@pytest.fixture
def courses_repo():
    return InMemoryCourses(
        [
            Course(
                course_id="C1",
                course_type="IELTS",
                main_teacher_id="u-teacher",
                start_date=date(2024, 1, 1),
                end_date=date(2024, 12, 31),
                start_time=time(18, 0),
                end_time=time(19, 30),
                study_days="Mon,Wed",
                room="R101",
            )
        ]
    )


@pytest.fixture
def students_repo(courses_repo):
    return InMemoryStudents(courses_repo)


@pytest.fixture
def attendance_repo():
    return InMemoryAttendance(roster={7: {1, 2}}, names={1: "An", 2: "Binh"})


@pytest.fixture
def payroll_repo(users_repo):
    teacher = users_repo.get_by_id("u-teacher")
    ta = users_repo.get_by_id("u-ta")
    return InMemoryPayroll(
        lines={
            (5, 2024): [
                _line(teacher, 1, "Offline", 10, 200.0),
                _line(teacher, 2, "Online", 4, 150.0),
                _line(ta, 1, "Offline", 8, 100.0),
            ]
        },
        rates={("u-teacher", 1): 200.0, ("u-teacher", 2): 150.0, ("u-ta", 1): 100.0},
    )


@pytest.fixture
def tokens():
    return TokenService(SECRET, expire_minutes=5)


@pytest.fixture
def admin_claims():
    return AuthClaims(user_id="u-admin", role=Role.ADMIN, display_name="Center Admin")


@pytest.fixture
def leader_claims():
    return AuthClaims(user_id="u-leader", role=Role.LEADER, display_name="Lan Leader")


@pytest.fixture
def teacher_claims():
    return AuthClaims(user_id="u-teacher", role=Role.USER, display_name="Tom Teacher")


@pytest.fixture
def container(tokens, users_repo, courses_repo, students_repo, attendance_repo, payroll_repo):
    return assemble_container(
        tokens=tokens,
        users_repo=users_repo,
        courses_repo=courses_repo,
        students_repo=students_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
    )


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(tokens, users_repo):
    def _headers(user_id):
        return {"Authorization": f"Bearer {tokens.issue(users_repo.get_by_id(user_id))}"}

    return _headers
