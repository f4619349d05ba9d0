from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, PersistenceError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, transaction
from .model import AttendanceMark, AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, student_id: int, class_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.student_id, a.class_id, a.status, s.student_name
                FROM student_attendance a
                JOIN students s ON s.student_id = a.student_id
                WHERE a.student_id=%s AND a.class_id=%s
                """,
                (int(student_id), int(class_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return AttendanceRecord(
                student_id=int(r["student_id"]),
                class_id=int(r["class_id"]),
                status=AttendanceStatus(r["status"]),
                student_name=r.get("student_name") or "",
            )

    def list_for_class(self, class_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.student_id, a.class_id, a.status, s.student_name
                FROM student_attendance a
                JOIN students s ON s.student_id = a.student_id
                WHERE a.class_id=%s
                ORDER BY s.student_name ASC
                """,
                (int(class_id),),
            )
            return [
                AttendanceRecord(
                    student_id=int(r["student_id"]),
                    class_id=int(r["class_id"]),
                    status=AttendanceStatus(r["status"]),
                    student_name=r.get("student_name") or "",
                )
                for r in fetchall(cur)
            ]

    def record_marks(self, *, class_id: int, marks: Sequence[AttendanceMark]) -> int:
        with transaction(self._conn_factory) as (_, cur):
            cur.execute("SELECT course_id FROM class_sessions WHERE class_id=%s FOR SHARE", (int(class_id),))
            session = fetchone(cur)
            if not session:
                raise NotFoundError(f"Class {class_id} does not exist")

            for mark in marks:
                cur.execute(
                    "SELECT COUNT(*) AS n FROM course_students WHERE course_id=%s AND student_id=%s",
                    (session["course_id"], mark.student_id),
                )
                row = fetchone(cur)
                if not row or int(row["n"]) == 0:
                    raise ValidationError(f"Student {mark.student_id} is not enrolled in course {session['course_id']}")

                cur.execute(
                    """
                    INSERT INTO student_attendance(student_id, class_id, status)
                    VALUES(%s,%s,%s)
                    ON DUPLICATE KEY UPDATE status=VALUES(status)
                    """,
                    (mark.student_id, int(class_id), mark.status.value),
                )
        return len(marks)

    def update_status(self, *, student_id: int, class_id: int, status: AttendanceStatus) -> None:
        with transaction(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS n
                FROM student_attendance
                WHERE student_id=%s AND class_id=%s
                FOR UPDATE
                """,
                (int(student_id), int(class_id)),
            )
            row = fetchone(cur)
            matched = int(row["n"]) if row else 0
            if matched == 0:
                raise NotFoundError(f"No attendance recorded for student {student_id} in class {class_id}")
            if matched > 1:
                raise PersistenceError(f"{matched} attendance rows for student {student_id} in class {class_id}")

            cur.execute(
                "UPDATE student_attendance SET status=%s WHERE student_id=%s AND class_id=%s",
                (status.value, int(student_id), int(class_id)),
            )
            if cur.rowcount != 1:
                raise PersistenceError(f"Attendance update touched {cur.rowcount} rows")
        logger.info("Attendance of student %s in class %s set to %s", student_id, class_id, status.value)
