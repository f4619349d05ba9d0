from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    LEADER = "leader"
    USER = "user"

    @classmethod
    def parse(cls, value: object) -> "Role":
        """Unknown or missing roles fall back to the least privileged tier."""
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.USER

    @property
    def is_elevated(self) -> bool:
        return self in (Role.ADMIN, Role.LEADER)


class JobPosition(str, Enum):
    TEACHER = "Teacher"
    TA = "TA"


class AttendanceStatus(str, Enum):
    """Student attendance status stored per (student, class)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"
    EXCUSED = "EXCUSED"
