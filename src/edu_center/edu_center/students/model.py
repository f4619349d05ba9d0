from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import format_iso_date, require_iso_date
from ..common.validators import optional_text, require_non_empty


@dataclass(frozen=True)
class Student:
    student_id: int
    name: str
    dob: date
    email: Optional[str] = None
    phone_number: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "name": self.name,
            "dob": format_iso_date(self.dob),
            "email": self.email,
            "phone_number": self.phone_number,
        }


@dataclass(frozen=True)
class NewStudent:
    """Validated student row ready to be inserted."""

    name: str
    dob: date
    email: Optional[str] = None
    phone_number: Optional[str] = None


@dataclass(frozen=True)
class NewStudentRequest:
    name: str
    dob: str
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "NewStudentRequest":
        return cls(
            name=str(body.get("name") or ""),
            dob=str(body.get("dob") or ""),
            email=optional_text(body.get("email"), "email"),
            phone_number=optional_text(body.get("phone_number"), "phone_number"),
        )

    def to_new_student(self) -> NewStudent:
        return NewStudent(
            name=require_non_empty(self.name, "name"),
            dob=require_iso_date(self.dob, "dob"),
            email=self.email,
            phone_number=self.phone_number,
        )
