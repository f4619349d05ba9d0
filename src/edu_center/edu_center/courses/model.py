from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Any, Optional

from ..common.datetime_utils import format_iso_date
from ..common.validators import optional_text


def _fmt_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M") if value else None


@dataclass(frozen=True)
class Course:
    course_id: str
    course_type: str
    main_teacher_id: Optional[str]
    start_date: date
    end_date: date
    start_time: time
    end_time: time
    study_days: str
    room: Optional[str] = None
    main_teacher_name: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "course_id": self.course_id,
            "course_type": self.course_type,
            "main_teacher_id": self.main_teacher_id,
            "main_teacher_name": self.main_teacher_name,
            "start_date": format_iso_date(self.start_date),
            "end_date": format_iso_date(self.end_date),
            "start_time": _fmt_time(self.start_time),
            "end_time": _fmt_time(self.end_time),
            "study_days": self.study_days,
            "room": self.room,
        }


@dataclass(frozen=True)
class ClassSession:
    """A single dated occurrence of a course; attendance is recorded against it."""

    class_id: int
    course_id: str
    teacher_id: Optional[str]
    class_date: date
    start_time: time
    end_time: time
    room: Optional[str] = None
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "class_id": self.class_id,
            "course_id": self.course_id,
            "teacher_id": self.teacher_id,
            "class_date": format_iso_date(self.class_date),
            "start_time": _fmt_time(self.start_time),
            "end_time": _fmt_time(self.end_time),
            "room": self.room,
            "note": self.note,
        }


@dataclass(frozen=True)
class NewCourseRequest:
    course_id: str
    course_type: str
    main_teacher_id: str
    start_date: str
    end_date: str
    start_time: str
    end_time: str
    study_days: str
    room: Optional[str] = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "NewCourseRequest":
        return cls(
            course_id=str(body.get("course_id") or ""),
            course_type=str(body.get("course_type") or ""),
            main_teacher_id=str(body.get("main_teacher_id") or ""),
            start_date=str(body.get("start_date") or ""),
            end_date=str(body.get("end_date") or ""),
            start_time=str(body.get("start_time") or ""),
            end_time=str(body.get("end_time") or ""),
            study_days=str(body.get("study_days") or ""),
            room=optional_text(body.get("room"), "room"),
        )


@dataclass(frozen=True)
class NewSessionRequest:
    class_date: str
    start_time: str
    end_time: str
    teacher_id: Optional[str] = None
    room: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "NewSessionRequest":
        return cls(
            class_date=str(body.get("class_date") or ""),
            start_time=str(body.get("start_time") or ""),
            end_time=str(body.get("end_time") or ""),
            teacher_id=optional_text(body.get("teacher_id"), "teacher_id"),
            room=optional_text(body.get("room"), "room"),
            note=optional_text(body.get("note"), "note"),
        )
