from __future__ import annotations

import logging
from typing import Sequence

from ..auth.claims import AuthClaims
from ..common.datetime_utils import require_iso_date, require_time
from ..common.validators import require_non_empty
from ..core.enums import JobPosition
from ..core.exceptions import AuthorizationError, CourseNotFoundError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import ClassSession, Course, NewCourseRequest, NewSessionRequest
from .repository import CourseRepository

logger = logging.getLogger(__name__)


class CourseService:
    def __init__(self, courses: CourseRepository, users: UserRepository):
        self._courses = courses
        self._users = users

    def require_course(self, course_id: str) -> None:
        if not self._courses.exists(course_id):
            logger.info("Course %s does not exist", course_id)
            raise CourseNotFoundError(course_id)

    def list_courses(self) -> Sequence[Course]:
        return self._courses.list_all()

    def create_course(self, claims: AuthClaims, req: NewCourseRequest) -> str:
        if not claims.is_elevated:
            raise AuthorizationError("You are not allowed to access this function")

        course_id = require_non_empty(req.course_id, "course_id")
        course_type = require_non_empty(req.course_type, "course_type")
        study_days = require_non_empty(req.study_days, "study_days")
        teacher_id = require_non_empty(req.main_teacher_id, "main_teacher_id")
        start_date = require_iso_date(req.start_date, "start_date")
        end_date = require_iso_date(req.end_date, "end_date")
        start_time = require_time(req.start_time, "start_time")
        end_time = require_time(req.end_time, "end_time")

        if end_date < start_date:
            raise ValidationError("end_date must not be before start_date")
        if end_time <= start_time:
            raise ValidationError("end_time must be after start_time")

        teacher = self._users.get_by_id(teacher_id)
        if not teacher:
            raise NotFoundError(f"User {teacher_id} does not exist")
        if teacher.job_position != JobPosition.TEACHER.value:
            raise ValidationError("main teacher must have the Teacher job position")

        if self._courses.exists(course_id):
            raise ValidationError(f"Course {course_id} already exists")

        self._courses.create_course(
            Course(
                course_id=course_id,
                course_type=course_type,
                main_teacher_id=teacher_id,
                start_date=start_date,
                end_date=end_date,
                start_time=start_time,
                end_time=end_time,
                study_days=study_days,
                room=req.room,
            )
        )
        logger.info("Course %s created by %s", course_id, claims.user_id)
        return course_id

    def list_sessions(self, course_id: str) -> Sequence[ClassSession]:
        self.require_course(course_id)
        return self._courses.list_sessions(course_id)

    def add_session(self, claims: AuthClaims, course_id: str, req: NewSessionRequest) -> int:
        if not claims.is_elevated:
            raise AuthorizationError("You are not allowed to access this function")

        class_date = require_iso_date(req.class_date, "class_date")
        start_time = require_time(req.start_time, "start_time")
        end_time = require_time(req.end_time, "end_time")
        if end_time <= start_time:
            raise ValidationError("end_time must be after start_time")

        course = self._courses.get_by_id(course_id)
        if not course:
            raise CourseNotFoundError(course_id)
        if not course.start_date <= class_date <= course.end_date:
            raise ValidationError("class_date is outside the course schedule")

        teacher_id = req.teacher_id or course.main_teacher_id
        if req.teacher_id and not self._users.get_by_id(req.teacher_id):
            raise NotFoundError(f"User {req.teacher_id} does not exist")

        class_id = self._courses.create_session(
            course_id=course_id,
            teacher_id=teacher_id,
            class_date=class_date,
            start_time=start_time,
            end_time=end_time,
            room=req.room or course.room,
            note=req.note,
        )
        logger.info("Class %s added to course %s", class_id, course_id)
        return class_id
