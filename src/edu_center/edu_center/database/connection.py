from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag

from ..core.constants import DEFAULT_POOL_SIZE


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_name: str = "edu_center"
    pool_size: int = DEFAULT_POOL_SIZE
    # 0 disables the server side MAX_EXECUTION_TIME ceiling.
    query_timeout_ms: int = 0

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "edu_center")),
            pool_name=str(db_config.get("pool_name", "edu_center")),
            pool_size=int(db_config.get("pool_size", DEFAULT_POOL_SIZE)),
            query_timeout_ms=int(db_config.get("query_timeout_ms", 0)),
        )


class DatabaseConnection:
    """Pooled DB connection factory.

    One instance is built by the container and shared by every repository.
    ``connect()`` checks a connection out of the pool; ``close()`` on that
    connection hands it back, so callers must scope it to a single operation
    or transaction (see ``mysql_base.db_cursor`` / ``mysql_base.transaction``).
    """

    def __init__(self, config: DBConfig, *, pool: Optional[pooling.MySQLConnectionPool] = None):
        self._config = config
        self._pool = pool
        self._lock = threading.Lock()

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._config.pool_name,
                    pool_size=int(self._config.pool_size),
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    autocommit=False,
                    # rowcount reports matched rows, not changed rows.
                    client_flags=[ClientFlag.FOUND_ROWS],
                )
            return self._pool

    def connect(self):
        conn = self._get_pool().get_connection()
        if self._config.query_timeout_ms:
            try:
                cur = conn.cursor()
                try:
                    cur.execute("SET SESSION MAX_EXECUTION_TIME=%s", (int(self._config.query_timeout_ms),))
                finally:
                    cur.close()
            except BaseException:
                # Hand the connection back to the pool before the caller sees the error.
                conn.close()
                raise
        return conn
