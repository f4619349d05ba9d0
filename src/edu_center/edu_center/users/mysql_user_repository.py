from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import coerce_date
from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, transaction
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_USER_COLUMNS = (
    "user_id, username, email, role, dob, start_date, job_position, password_hash, full_name, gender, is_active"
)


def _row_to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        username=row["username"],
        email=row["email"],
        role=Role.parse(row.get("role")),
        full_name=row["full_name"],
        password_hash=row["password_hash"],
        job_position=row.get("job_position"),
        dob=coerce_date(row.get("dob")),
        start_date=coerce_date(row.get("start_date")),
        gender=row.get("gender"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_username(self, username: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE username=%s", (username,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def find_one(self, *, username: str = "", email: str = "", user_id: str = "") -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE username=%s OR email=%s OR user_id=%s
                LIMIT 1
                """,
                (username, email, user_id),
            )
            row = fetchone(cur)
            if not row:
                logger.info("No user matches username=%r email=%r id=%r", username, email, user_id)
                return None
            return _row_to_user(row)

    def exists_username_or_email(self, *, username: str, email: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT COUNT(*) AS n FROM users WHERE username=%s OR email=%s",
                (username, email),
            )
            row = fetchone(cur)
            return bool(row and int(row["n"]) > 0)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, username, email, role, dob, start_date, job_position,
                                  password_hash, full_name, gender, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (user_id, username, email, role.value, dob, start_date, job_position, password_hash, full_name, gender),
            )
            return user_id

    def update_profile(
        self,
        *,
        user_id: str,
        email: str,
        dob: date,
        full_name: str,
        gender: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET email=%s, dob=%s, full_name=%s, gender=%s
                WHERE user_id=%s
                """,
                (email, dob, full_name, gender, user_id),
            )
            return cur.rowcount > 0

    def update_password(self, *, user_id: str, password_hash: str) -> bool:
        with transaction(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET password_hash=%s WHERE user_id=%s", (password_hash, user_id))
            return cur.rowcount > 0

    def list_by_job_position(self, job_position: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_USER_COLUMNS}
                FROM users
                WHERE job_position=%s AND is_active=1
                ORDER BY full_name
                """,
                (job_position,),
            )
            return [_row_to_user(r) for r in fetchall(cur)]
