from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.claims import AuthClaims
from ..auth.tokens import TokenService
from ..common.datetime_utils import require_iso_date
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import JobPosition, Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .model import ModifyUserInformationRequest, RegisterRequest, User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def _password_matches(password_hash: str, password: str) -> bool:
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
        return False


class AuthService:
    """Use case: login and self registration."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def authenticate(self, username: str, password: str) -> LoginResult:
        username = require_non_empty(username, "username")
        user = self._users.get_by_username(username)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid password or username")

        if not _password_matches(user.password_hash, password):
            raise AuthenticationError("Invalid password or username")

        logger.info("User %s logged in", user.username)
        return LoginResult(token=self._tokens.issue(user), user=user)

    def register(self, req: RegisterRequest, *, today: Optional[date] = None) -> str:
        username = require_non_empty(req.username, "username")
        email = require_email(req.email)
        full_name = require_non_empty(req.full_name, "full_name")
        require_min_length(req.password, "password", MIN_PASSWORD_LENGTH)
        dob = require_iso_date(req.dob, "dob") if req.dob else None

        job_position = req.job_position or None
        if job_position is not None and job_position not in {p.value for p in JobPosition}:
            raise ValidationError("job_position must be Teacher or TA")

        if self._users.exists_username_or_email(username=username, email=email):
            raise ValidationError("Username or email already exists")

        # Self registration never grants an elevated role.
        user_id = self._users.create_user(
            user_id=uuid.uuid4().hex,
            username=username,
            email=email,
            role=Role.USER,
            password_hash=generate_password_hash(req.password),
            full_name=full_name,
            gender=req.gender,
            dob=dob,
            start_date=today or date.today(),
            job_position=job_position,
        )
        logger.info("Registered user %s (%s)", username, user_id)
        return user_id


class UserService:
    """Use case: user lookup and self service profile changes."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_user(self, *, username: str = "", email: str = "", user_id: str = "") -> Optional[User]:
        """At most one user; ``None`` means the lookup ran and matched nothing."""
        if not (username or email or user_id):
            raise ValidationError("username, email or id is required")
        return self._users.find_one(username=username or "", email=email or "", user_id=user_id or "")

    def modify_user_information(self, claims: AuthClaims, req: ModifyUserInformationRequest) -> None:
        email = require_email(req.email)
        full_name = require_non_empty(req.full_name, "full_name")
        dob = require_iso_date(req.dob, "dob")

        owner = self._users.find_one(email=email)
        if owner and owner.user_id != claims.user_id:
            raise ValidationError("Email already belongs to another user")

        if not self._users.update_profile(
            user_id=claims.user_id,
            email=email,
            dob=dob,
            full_name=full_name,
            gender=req.gender,
        ):
            raise NotFoundError("User does not exist")
        logger.info("Updated profile of user %s", claims.user_id)

    def change_password(self, claims: AuthClaims, *, old_password: str, new_password: str) -> None:
        require_min_length(new_password, "new_password", MIN_PASSWORD_LENGTH)

        user = self._users.get_by_id(claims.user_id)
        if not user:
            raise NotFoundError("User does not exist")
        if not _password_matches(user.password_hash, old_password):
            raise AuthenticationError("Current password is incorrect")

        if not self._users.update_password(user_id=user.user_id, password_hash=generate_password_hash(new_password)):
            raise NotFoundError("User does not exist")
        logger.info("Changed password of user %s", user.user_id)

    def list_by_job_position(self, job_position: str) -> Sequence[User]:
        if job_position not in {p.value for p in JobPosition}:
            raise ValidationError("job position must be Teacher or TA")
        return self._users.list_by_job_position(job_position)
