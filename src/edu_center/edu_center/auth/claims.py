from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class AuthClaims:
    """Identity resolved from a bearer token and attached to the request."""

    user_id: str
    role: Role
    display_name: str

    @property
    def is_elevated(self) -> bool:
        return self.role.is_elevated
