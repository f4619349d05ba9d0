from __future__ import annotations

from typing import Protocol, Sequence

from .model import NewStudent, Student


class StudentRepository(Protocol):
    def enroll_students(self, *, course_id: str, students: Sequence[NewStudent]) -> list[int]:
        """Insert every student and link it to the course in one transaction.

        Raises CourseNotFoundError, with nothing written, when the course is absent.
        """

        raise NotImplementedError

    def list_by_course(self, course_id: str) -> Sequence[Student]:
        raise NotImplementedError
