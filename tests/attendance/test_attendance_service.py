import pytest

from edu_center.attendance.model import AttendanceMark, UpdateAttendanceRequest, parse_status
from edu_center.attendance.service import AttendanceService
from edu_center.core.enums import AttendanceStatus
from edu_center.core.exceptions import NotFoundError, ValidationError


def _mark(student_id, status):
    return AttendanceMark(student_id=student_id, status=AttendanceStatus(status))


def test_record_then_fix_single_row(attendance_repo):
    svc = AttendanceService(attendance_repo)
    svc.record_attendance(7, [_mark(1, "PRESENT"), _mark(2, "PRESENT")])

    record = svc.update_attendance_status(
        UpdateAttendanceRequest.from_json({"student_id": 1, "class_id": 7, "status": "late"})
    )

    assert record.status is AttendanceStatus.LATE
    assert record.student_name == "An"
    assert attendance_repo.rows[(2, 7)] is AttendanceStatus.PRESENT


def test_fix_without_recorded_attendance_is_not_found(attendance_repo):
    with pytest.raises(NotFoundError):
        AttendanceService(attendance_repo).update_attendance_status(
            UpdateAttendanceRequest(student_id=1, class_id=7, status=AttendanceStatus.ABSENT)
        )

    assert attendance_repo.rows == {}


def test_record_rejects_empty_and_duplicate_marks(attendance_repo):
    svc = AttendanceService(attendance_repo)

    with pytest.raises(ValidationError):
        svc.record_attendance(7, [])
    with pytest.raises(ValidationError):
        svc.record_attendance(7, [_mark(1, "PRESENT"), _mark(1, "ABSENT")])


def test_record_for_student_outside_course_writes_nothing(attendance_repo):
    with pytest.raises(ValidationError):
        AttendanceService(attendance_repo).record_attendance(7, [_mark(1, "PRESENT"), _mark(99, "PRESENT")])

    assert attendance_repo.rows == {}


def test_list_for_class(attendance_repo):
    svc = AttendanceService(attendance_repo)
    svc.record_attendance(7, [_mark(2, "ABSENT"), _mark(1, "EXCUSED")])

    assert [r.to_dict() for r in svc.list_for_class(7)] == [
        {"student_id": 1, "student_name": "An", "class_id": 7, "status": "EXCUSED"},
        {"student_id": 2, "student_name": "Binh", "class_id": 7, "status": "ABSENT"},
    ]


@pytest.mark.parametrize("value", ["", "here", None])
def test_parse_status_rejects_unknown_values(value):
    with pytest.raises(ValidationError):
        parse_status(value)
