from __future__ import annotations

from flask import Flask

from ..auth.gate import login_required
from ..common.http import json_response, read_json_body, require_query_param
from ..common.validators import require_int
from ..container import Container
from .model import AttendanceMark, UpdateAttendanceRequest


def register(app: Flask, container: Container) -> None:
    @app.route("/check-attendance-student", methods=["POST"], endpoint="check_attendance_student")
    @login_required
    def check_attendance_student():
        class_id = require_int(require_query_param("class_id"), "class_id")
        marks = [AttendanceMark.from_json(e) for e in read_json_body(expect=list)]
        count = container.attendance_service.record_attendance(class_id, marks)
        return json_response("Attendance recorded", {"class_id": class_id, "count": count})

    @app.route("/fix-attendance-status", methods=["PUT"], endpoint="fix_attendance_status")
    @login_required
    def fix_attendance_status():
        req = UpdateAttendanceRequest.from_json(read_json_body())
        record = container.attendance_service.update_attendance_status(req)
        return json_response("Attendance status updated", record.to_dict() if record else None)

    @app.route("/class-attendance", methods=["GET"], endpoint="class_attendance")
    @login_required
    def class_attendance():
        class_id = require_int(require_query_param("class_id"), "class_id")
        records = container.attendance_service.list_for_class(class_id)
        return json_response("Successful get attendance", [r.to_dict() for r in records])
