from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import ValidationError
from .model import AttendanceMark, AttendanceRecord, UpdateAttendanceRequest
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def record_attendance(self, class_id: int, marks: Sequence[AttendanceMark]) -> int:
        if not marks:
            raise ValidationError("At least one attendance entry is required")
        if len({m.student_id for m in marks}) != len(marks):
            raise ValidationError("student_id must not repeat")

        count = self._attendance.record_marks(class_id=int(class_id), marks=list(marks))
        logger.info("Recorded %s attendance entries for class %s", count, class_id)
        return count

    def update_attendance_status(self, req: UpdateAttendanceRequest) -> Optional[AttendanceRecord]:
        self._attendance.update_status(student_id=req.student_id, class_id=req.class_id, status=req.status)
        return self._attendance.get(student_id=req.student_id, class_id=req.class_id)

    def list_for_class(self, class_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_class(int(class_id))
