from __future__ import annotations

from flask import Flask, request

from ..auth.gate import elevated_required, login_required
from ..common.http import json_response, read_json_body, require_query_param
from ..container import Container
from ..core.exceptions import ValidationError
from .model import NewStudentRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/insert-students", methods=["POST"], endpoint="insert_students")
    @login_required
    def insert_students():
        course_id = require_query_param("course_id")
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("Missing or invalid 'file' field in the request")

        ids = container.student_service.import_students_by_file(upload.stream, upload.filename, course_id)
        return json_response(
            "Successful insert students list to database by importing excel data",
            {"course_id": course_id, "student_ids": ids},
        )

    @app.route("/add-student", methods=["POST"], endpoint="add_student")
    @elevated_required
    def add_student():
        course_id = require_query_param("course_id")
        req = NewStudentRequest.from_json(read_json_body())
        student_id = container.student_service.insert_one_student(req, course_id)
        return json_response(
            "Successful insert one student list to database",
            {"course_id": course_id, "student_id": student_id},
        )

    @app.route("/students", methods=["GET"], endpoint="students_by_course")
    @login_required
    def students_by_course():
        course_id = require_query_param("course_id")
        students = container.student_service.get_students_by_course_id(course_id)
        return json_response("Successful get students", [s.to_dict() for s in students])
