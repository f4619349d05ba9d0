import pytest

from edu_center.attendance.model import AttendanceMark
from edu_center.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from edu_center.core.enums import AttendanceStatus
from edu_center.core.exceptions import NotFoundError, PersistenceError, ValidationError


def _existing_rows(scripted_db, n):
    scripted_db.on("FROM student_attendance WHERE student_id=%s AND class_id=%s FOR UPDATE", lambda params: {"rows": [{"n": n}]})


def test_update_missing_pair_is_not_found_and_updates_nothing(scripted_db):
    _existing_rows(scripted_db, 0)

    with pytest.raises(NotFoundError):
        MySQLAttendanceRepository(scripted_db).update_status(student_id=1, class_id=7, status=AttendanceStatus.LATE)

    assert scripted_db.statements("UPDATE") == []
    assert scripted_db.commits == 0


def test_update_existing_pair_touches_only_that_row(scripted_db):
    _existing_rows(scripted_db, 1)

    MySQLAttendanceRepository(scripted_db).update_status(student_id=1, class_id=7, status=AttendanceStatus.LATE)

    assert scripted_db.committed == [
        ("UPDATE student_attendance SET status=%s WHERE student_id=%s AND class_id=%s", ("LATE", 1, 7))
    ]


def test_update_with_duplicate_rows_is_refused(scripted_db):
    _existing_rows(scripted_db, 2)

    with pytest.raises(PersistenceError):
        MySQLAttendanceRepository(scripted_db).update_status(student_id=1, class_id=7, status=AttendanceStatus.LATE)

    assert scripted_db.statements("UPDATE") == []
    assert scripted_db.rollbacks == 1


def test_record_marks_for_missing_class(scripted_db):
    scripted_db.on("FROM class_sessions", lambda params: {"rows": []})

    with pytest.raises(NotFoundError):
        MySQLAttendanceRepository(scripted_db).record_marks(
            class_id=7, marks=[AttendanceMark(student_id=1, status=AttendanceStatus.PRESENT)]
        )

    assert scripted_db.statements("INSERT") == []


def test_record_marks_rolls_back_when_a_student_is_not_enrolled(scripted_db):
    scripted_db.on("FROM class_sessions", lambda params: {"rows": [{"course_id": "C1"}]})
    scripted_db.on("FROM course_students", lambda params: {"rows": [{"n": 1 if params[1] == 1 else 0}]})

    with pytest.raises(ValidationError):
        MySQLAttendanceRepository(scripted_db).record_marks(
            class_id=7,
            marks=[
                AttendanceMark(student_id=1, status=AttendanceStatus.PRESENT),
                AttendanceMark(student_id=2, status=AttendanceStatus.ABSENT),
            ],
        )

    assert len(scripted_db.statements("INSERT")) == 1
    assert scripted_db.committed == []
    assert scripted_db.rollbacks == 1
