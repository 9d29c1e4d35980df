from __future__ import annotations

import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from mysql.connector import pooling
from mysql.connector.constants import ClientFlag


@dataclass
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = 5

    @classmethod
    def from_dict(cls, db_config: dict, *, pool_size: int = 5) -> "DBConfig":
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "office_db")),
            pool_size=int(pool_size),
        )


class DatabaseConnection:
    """Bounded pool of MySQL connections, one instance per application.

    The pool is created lazily on first use so an app can start (and answer
    /api/health) before MySQL is reachable. `connection()` blocks while every
    pooled connection is checked out.
    """

    def __init__(self, config: DBConfig, *, pool_name: str = "office_pool"):
        self._config = config
        self._pool_name = pool_name
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()
        self._slots = threading.BoundedSemaphore(config.pool_size)

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self._pool_name,
                    pool_size=self._config.pool_size,
                    pool_reset_session=True,
                    host=self._config.host,
                    port=int(self._config.port),
                    user=self._config.user,
                    password=self._config.password,
                    database=self._config.database,
                    # rowcount = matched rows, so an UPDATE that changes nothing still counts.
                    client_flags=[ClientFlag.FOUND_ROWS],
                )
            return self._pool

    @contextmanager
    def connection(self) -> Iterator:
        self._slots.acquire()
        try:
            conn = self._get_pool().get_connection()
            try:
                yield conn
            finally:
                # Returns the connection to the pool.
                conn.close()
        finally:
            self._slots.release()

    def ping(self) -> bool:
        try:
            with self.connection() as conn:
                cur = conn.cursor()
                try:
                    cur.execute("SELECT 1")
                    cur.fetchall()
                finally:
                    cur.close()
            return True
        except Exception:
            return False
