from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Callable, Dict, List, Optional, TypeVar

import mysql.connector

from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _open(conn_factory):
    try:
        return conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.error("Unable to check out a database connection: %s", exc)
        raise PersistenceError("Database is unavailable") from exc


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.exception("Rollback failed")


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Single statement scope: commit on success, rollback on any error."""
    conn = _open(conn_factory)
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _rollback(conn)
        raise PersistenceError(str(exc)) from exc
    except BaseException:
        _rollback(conn)
        raise
    finally:
        conn.close()


@contextmanager
def transaction(conn_factory, *, dictionary: bool = True):
    """Multi statement unit of work.

    Every statement executed through the yielded cursor is committed together
    when the block exits normally. Any exception, including ``BaseException``
    subclasses, rolls the whole unit back before it propagates. Driver errors
    surface as ``PersistenceError`` with the driver error as ``__cause__``.
    """
    conn = _open(conn_factory)
    try:
        conn.start_transaction()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
        finally:
            cur.close()
        conn.commit()
    except mysql.connector.Error as exc:
        logger.warning("Rolling back transaction: %s", exc)
        _rollback(conn)
        raise PersistenceError(str(exc)) from exc
    except BaseException as exc:
        logger.warning("Rolling back transaction: %r", exc)
        _rollback(conn)
        raise
    finally:
        conn.close()


def run_in_transaction(conn_factory, work: Callable[[Any], T], *, dictionary: bool = True) -> T:
    """Run ``work(cursor)`` inside ``transaction`` and return its result."""
    with transaction(conn_factory, dictionary=dictionary) as (_, cur):
        return work(cur)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")
