from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

from ..common.datetime_utils import format_iso_date
from ..common.validators import optional_text
from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; no database access lives here.
    """

    user_id: str
    username: str
    email: str
    role: Role
    full_name: str
    password_hash: str
    job_position: Optional[str] = None
    dob: Optional[date] = None
    start_date: Optional[date] = None
    gender: Optional[str] = None
    is_active: bool = True

    def to_profile(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "email": self.email,
            "role": self.role.value,
            "full_name": self.full_name,
            "gender": self.gender,
            "dob": format_iso_date(self.dob),
            "job_position": self.job_position,
            "starting_date": format_iso_date(self.start_date),
        }


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    email: str
    password: str
    full_name: str
    gender: Optional[str] = None
    dob: Optional[str] = None
    job_position: Optional[str] = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "RegisterRequest":
        return cls(
            username=str(body.get("username") or ""),
            email=str(body.get("email") or ""),
            password=str(body.get("password") or ""),
            full_name=str(body.get("full_name") or ""),
            gender=optional_text(body.get("gender"), "gender"),
            dob=optional_text(body.get("dob"), "dob"),
            job_position=optional_text(body.get("job_position"), "job_position"),
        )


@dataclass(frozen=True)
class ModifyUserInformationRequest:
    email: str
    dob: str
    full_name: str
    gender: Optional[str] = None

    @classmethod
    def from_json(cls, body: dict[str, Any]) -> "ModifyUserInformationRequest":
        return cls(
            email=str(body.get("email") or ""),
            dob=str(body.get("dob") or ""),
            full_name=str(body.get("full_name") or ""),
            gender=optional_text(body.get("gender"), "gender"),
        )
