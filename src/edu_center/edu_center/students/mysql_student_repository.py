from __future__ import annotations

import logging
from typing import Sequence

from ..common.datetime_utils import coerce_date
from ..core.exceptions import CourseNotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, transaction
from .model import NewStudent, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def enroll_students(self, *, course_id: str, students: Sequence[NewStudent]) -> list[int]:
        ids: list[int] = []
        with transaction(self._conn_factory) as (_, cur):
            # Checked inside the transaction so the course cannot vanish between check and insert.
            cur.execute("SELECT course_id FROM courses WHERE course_id=%s FOR SHARE", (course_id,))
            if not fetchone(cur):
                raise CourseNotFoundError(course_id)

            for s in students:
                cur.execute(
                    "INSERT INTO students(student_name, dob, email, phone_number) VALUES(%s,%s,%s,%s)",
                    (s.name, s.dob, s.email, s.phone_number),
                )
                student_id = int(cur.lastrowid)
                cur.execute(
                    "INSERT INTO course_students(student_id, course_id) VALUES(%s,%s)",
                    (student_id, course_id),
                )
                ids.append(student_id)

        logger.info("Enrolled %s students into course %s", len(ids), course_id)
        return ids

    def list_by_course(self, course_id: str) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT s.student_id, s.student_name, s.dob, s.email, s.phone_number
                FROM course_students cs
                JOIN students s ON s.student_id = cs.student_id
                WHERE cs.course_id=%s
                ORDER BY s.student_name ASC, s.student_id ASC
                """,
                (course_id,),
            )
            return [
                Student(
                    student_id=int(r["student_id"]),
                    name=r["student_name"],
                    dob=coerce_date(r["dob"]),
                    email=r.get("email"),
                    phone_number=r.get("phone_number"),
                )
                for r in fetchall(cur)
            ]
