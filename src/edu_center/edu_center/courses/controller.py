from __future__ import annotations

from flask import Flask

from ..auth.gate import current_claims, elevated_required, login_required
from ..common.http import json_response, read_json_body, require_query_param
from ..container import Container
from .model import NewCourseRequest, NewSessionRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/all-courses", methods=["GET"], endpoint="all_courses")
    @login_required
    def all_courses():
        courses = container.course_service.list_courses()
        return json_response("Successful get courses", [c.to_dict() for c in courses])

    @app.route("/new-course", methods=["POST"], endpoint="new_course")
    @elevated_required
    def new_course():
        req = NewCourseRequest.from_json(read_json_body())
        course_id = container.course_service.create_course(current_claims(), req)
        return json_response("Course created", {"course_id": course_id}, status=201)

    @app.route("/course-sessions", methods=["GET"], endpoint="course_sessions")
    @login_required
    def course_sessions():
        course_id = require_query_param("course_id")
        sessions = container.course_service.list_sessions(course_id)
        return json_response("Successful get course sessions", [s.to_dict() for s in sessions])

    @app.route("/add-class-session", methods=["POST"], endpoint="add_class_session")
    @elevated_required
    def add_class_session():
        course_id = require_query_param("course_id")
        req = NewSessionRequest.from_json(read_json_body())
        class_id = container.course_service.add_session(current_claims(), course_id, req)
        return json_response("Class session created", {"class_id": class_id}, status=201)
