from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from ..core.constants import DEFAULT_TOKEN_EXPIRE_MINUTES
from ..core.enums import Role
from ..core.exceptions import AuthenticationError
from ..users.model import User
from .claims import AuthClaims

ALGORITHM = "HS256"


class TokenService:
    """Issues and verifies the bearer credential.

    The token is opaque to clients; only ``sub``, ``role`` and ``name`` are read back.
    """

    def __init__(self, secret_key: str, *, expire_minutes: int = DEFAULT_TOKEN_EXPIRE_MINUTES):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self._expire_minutes = int(expire_minutes)

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload = {
            "sub": user.user_id,
            "role": user.role.value,
            "name": user.full_name,
            "iat": now,
            "exp": now + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=ALGORITHM)

    def decode(self, token: str) -> AuthClaims:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except JWTError:
            raise AuthenticationError("Invalid authentication credentials")

        user_id = payload.get("sub")
        name = payload.get("name")
        if not user_id or not name:
            raise AuthenticationError("Unable to get role/user name from token")

        return AuthClaims(user_id=str(user_id), role=Role.parse(payload.get("role")), display_name=str(name))
