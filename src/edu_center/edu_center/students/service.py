from __future__ import annotations

import logging
from typing import IO, Sequence

from ..courses.repository import CourseRepository
from ..core.exceptions import CourseNotFoundError
from .importer import parse_students
from .model import NewStudentRequest, Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    def __init__(self, students: StudentRepository, courses: CourseRepository):
        self._students = students
        self._courses = courses

    def _require_course(self, course_id: str) -> None:
        if not self._courses.exists(course_id):
            raise CourseNotFoundError(course_id)

    def import_students_by_file(self, stream: IO[bytes], filename: str, course_id: str) -> list[int]:
        students = parse_students(stream, filename)
        self._require_course(course_id)
        ids = self._students.enroll_students(course_id=course_id, students=students)
        logger.info("Imported %s students from %s into course %s", len(ids), filename, course_id)
        return ids

    def insert_one_student(self, req: NewStudentRequest, course_id: str) -> int:
        student = req.to_new_student()
        self._require_course(course_id)
        (student_id,) = self._students.enroll_students(course_id=course_id, students=[student])
        return student_id

    def get_students_by_course_id(self, course_id: str) -> Sequence[Student]:
        self._require_course(course_id)
        return self._students.list_by_course(course_id)
