from __future__ import annotations

import logging
import re
import uuid
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(
        host=target.host,
        port=target.port,
        user=target.user,
        password=target.password,
        use_pure=True,
    )
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql names a database; the configured one wins.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal splitter for schema/seed files; ';' inside quotes is kept.
    buf: list[str] = []
    quote = ""
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue
        if ch == "\\":
            buf.append(ch)
            escape = True
            continue
        if ch in ("'", '"'):
            if not quote:
                quote = ch
            elif quote == ch:
                quote = ""
            buf.append(ch)
            continue
        if ch == ";" and not quote:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue
        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _exec_sql_file(target: DBConfig, path: str | Path) -> int:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = _connect(target)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _exec_sql_file(DBConfig.from_dict(db_config), schema_path)
    logger.info("Applied %s statements from %s", count, schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _exec_sql_file(DBConfig.from_dict(db_config), seed_path)
    logger.info("Applied %s statements from %s", count, seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Create (or reset) the demo admin, leader and teacher accounts with rates."""
    target = DBConfig.from_dict(db_config)
    conn = _connect(target)
    try:
        cur = conn.cursor(dictionary=True)

        def upsert_user(username: str, password: str, role: str, full_name: str, job_position: str) -> str:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT user_id FROM users WHERE username=%s", (username,))
            existing = cur.fetchone()
            if existing:
                cur.execute(
                    """
                    UPDATE users
                    SET password_hash=%s, role=%s, full_name=%s, job_position=%s, is_active=1
                    WHERE username=%s
                    """,
                    (password_hash, role, full_name, job_position, username),
                )
                return existing["user_id"]

            user_id = uuid.uuid4().hex
            cur.execute(
                """
                INSERT INTO users (user_id, username, email, role, start_date, job_position, password_hash, full_name)
                VALUES (%s, %s, %s, %s, CURDATE(), %s, %s, %s)
                """,
                (user_id, username, f"{username}@example.com", role, job_position, password_hash, full_name),
            )
            return user_id

        admin_id = upsert_user("admin", "admin123", "admin", "Admin Demo", "Teacher")
        leader_id = upsert_user("leader", "leader123", "leader", "Leader Demo", "Teacher")
        teacher_id = upsert_user("teacher", "teacher123", "user", "Teacher Demo", "Teacher")

        cur.execute("SELECT payroll_id FROM payroll_types ORDER BY payroll_id")
        payroll_ids = [int(r["payroll_id"]) for r in cur.fetchall()]
        for user_id in (admin_id, leader_id, teacher_id):
            for payroll_id in payroll_ids:
                cur.execute(
                    "INSERT IGNORE INTO employee_rates (user_id, payroll_id, payroll_rate) VALUES (%s, %s, 0)",
                    (user_id, payroll_id),
                )

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
