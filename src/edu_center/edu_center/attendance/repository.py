from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceMark, AttendanceRecord


class AttendanceRepository(Protocol):
    def get(self, *, student_id: int, class_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_class(self, class_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def record_marks(self, *, class_id: int, marks: Sequence[AttendanceMark]) -> int:
        """Upsert the (student, class) rows in one transaction."""

        raise NotImplementedError

    def update_status(self, *, student_id: int, class_id: int, status: AttendanceStatus) -> None:
        """Overwrite exactly one existing row; NotFoundError when there is none."""

        raise NotImplementedError
