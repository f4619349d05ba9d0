from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..common.validators import require_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


def parse_status(value: Any) -> AttendanceStatus:
    try:
        return AttendanceStatus(str(value or "").strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in AttendanceStatus)
        raise ValidationError(f"status must be one of {allowed}")


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: attendance of one student in one class session."""

    student_id: int
    class_id: int
    status: AttendanceStatus
    student_name: str = ""

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "class_id": self.class_id,
            "status": self.status.value,
        }


@dataclass(frozen=True)
class AttendanceMark:
    student_id: int
    status: AttendanceStatus

    @classmethod
    def from_json(cls, body: Any) -> "AttendanceMark":
        if not isinstance(body, dict):
            raise ValidationError("Each attendance entry must be an object")
        return cls(student_id=require_int(body.get("student_id"), "student_id"), status=parse_status(body.get("status")))


@dataclass(frozen=True)
class UpdateAttendanceRequest:
    student_id: int
    class_id: int
    status: AttendanceStatus

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "UpdateAttendanceRequest":
        return cls(
            student_id=require_int(body.get("student_id"), "student_id"),
            class_id=require_int(body.get("class_id"), "class_id"),
            status=parse_status(body.get("status")),
        )
