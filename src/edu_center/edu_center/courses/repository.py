from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from .model import ClassSession, Course


class CourseRepository(Protocol):
    def exists(self, course_id: str) -> bool:
        raise NotImplementedError

    def get_by_id(self, course_id: str) -> Optional[Course]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Course]:
        raise NotImplementedError

    def create_course(self, course: Course) -> str:
        raise NotImplementedError

    def list_sessions(self, course_id: str) -> Sequence[ClassSession]:
        raise NotImplementedError

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
        raise NotImplementedError
