from __future__ import annotations

from datetime import date, time
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_time
from .model import ClassSession, Course
from .repository import CourseRepository


def _row_to_course(r: dict) -> Course:
    return Course(
        course_id=str(r["course_id"]),
        course_type=r["course_type"],
        main_teacher_id=r.get("main_teacher_id"),
        main_teacher_name=r.get("main_teacher_name"),
        start_date=coerce_date(r["start_date"]),
        end_date=coerce_date(r["end_date"]),
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        study_days=r["study_days"],
        room=r.get("room"),
    )


_COURSE_SELECT = """
    SELECT c.course_id, c.course_type, c.main_teacher_id, u.full_name AS main_teacher_name,
           c.start_date, c.end_date, c.start_time, c.end_time, c.study_days, c.room
    FROM courses c
    LEFT JOIN users u ON u.user_id = c.main_teacher_id
"""


class MySQLCourseRepository(CourseRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, course_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM courses WHERE course_id=%s", (course_id,))
            row = fetchone(cur)
            return bool(row and int(row["n"]) > 0)

    def get_by_id(self, course_id: str) -> Optional[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_COURSE_SELECT + " WHERE c.course_id=%s", (course_id,))
            row = fetchone(cur)
            return _row_to_course(row) if row else None

    def list_all(self) -> Sequence[Course]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_COURSE_SELECT + " ORDER BY c.start_date DESC, c.course_id")
            return [_row_to_course(r) for r in fetchall(cur)]

    def create_course(self, course: Course) -> str:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO courses(course_id, course_type, main_teacher_id, start_date, end_date,
                                    start_time, end_time, study_days, room)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    course.course_id,
                    course.course_type,
                    course.main_teacher_id,
                    course.start_date,
                    course.end_date,
                    course.start_time,
                    course.end_time,
                    course.study_days,
                    course.room,
                ),
            )
            return course.course_id

    def list_sessions(self, course_id: str) -> Sequence[ClassSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, course_id, teacher_id, class_date, start_time, end_time, room, note
                FROM class_sessions
                WHERE course_id=%s
                ORDER BY class_date ASC, start_time ASC
                """,
                (course_id,),
            )
            return [
                ClassSession(
                    class_id=int(r["class_id"]),
                    course_id=str(r["course_id"]),
                    teacher_id=r.get("teacher_id"),
                    class_date=coerce_date(r["class_date"]),
                    start_time=normalize_mysql_time(r["start_time"]),
                    end_time=normalize_mysql_time(r["end_time"]),
                    room=r.get("room"),
                    note=r.get("note"),
                )
                for r in fetchall(cur)
            ]

    def create_session(
        self,
        *,
        course_id: str,
        teacher_id: Optional[str],
        class_date: date,
        start_time: time,
        end_time: time,
        room: Optional[str],
        note: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO class_sessions(course_id, teacher_id, class_date, start_time, end_time, room, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (course_id, teacher_id, class_date, start_time, end_time, room, note),
            )
            return int(cur.lastrowid)
