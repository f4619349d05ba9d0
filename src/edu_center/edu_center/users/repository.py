from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def find_one(self, *, username: str = "", email: str = "", user_id: str = "") -> Optional[User]:
        """First user matching any of the identifiers, ``None`` when nothing matches."""

        raise NotImplementedError

    def exists_username_or_email(self, *, username: str, email: str) -> bool:
        raise NotImplementedError

    def create_user(
        self,
        *,
        user_id: str,
        username: str,
        email: str,
        role: Role,
        password_hash: str,
        full_name: str,
        gender: Optional[str],
        dob: Optional[date],
        start_date: date,
        job_position: Optional[str],
    ) -> str:
        raise NotImplementedError

    def update_profile(
        self,
        *,
        user_id: str,
        email: str,
        dob: date,
        full_name: str,
        gender: Optional[str],
    ) -> bool:
        raise NotImplementedError

    def update_password(self, *, user_id: str, password_hash: str) -> bool:
        raise NotImplementedError

    def list_by_job_position(self, job_position: str) -> Sequence[User]:
        raise NotImplementedError
