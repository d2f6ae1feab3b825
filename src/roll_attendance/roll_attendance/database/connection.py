from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import mysql.connector

from ..core.constants import BACKEND_MYSQL, BACKEND_SQLITE, DEFAULT_DB_NAME
from ..core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)


@dataclass
class DBConfig:
    backend: str = BACKEND_SQLITE
    path: str = DEFAULT_DB_NAME
    host: str = "localhost"
    port: int = 3306
    user: str = "root"
    password: str = ""
    database: str = "attendance_db"

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        backend = str(db_config.get("backend", BACKEND_SQLITE)).lower()
        if backend not in {BACKEND_SQLITE, BACKEND_MYSQL}:
            raise StorageUnavailableError(f"Unsupported storage backend: {backend!r}")
        return cls(
            backend=backend,
            path=str(db_config.get("path", DEFAULT_DB_NAME)),
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "attendance_db")),
        )

    def describe(self) -> str:
        if self.backend == BACKEND_SQLITE:
            return f"sqlite:{self.path}"
        return f"mysql:{self.user}@{self.host}:{self.port}/{self.database}"


class DatabaseConnection:
    """Owns the one connection used for the lifetime of the process.

    Opened on first use, released by ``close()`` or on leaving a ``with`` block.
    """

    def __init__(self, config: DBConfig):
        self._config = config
        self._conn: Optional[Any] = None

    @property
    def config(self) -> DBConfig:
        return self._config

    @property
    def backend(self) -> str:
        return self._config.backend

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self):
        if self._conn is None:
            self._conn = self._connect()
            logger.info("Opened attendance store %s", self._config.describe())
        return self._conn

    @property
    def connection(self):
        if self._conn is None:
            raise StorageUnavailableError("Attendance store is not open")
        return self._conn

    def close(self) -> None:
        conn, self._conn = self._conn, None
        if conn is None:
            return
        try:
            conn.close()
        except (sqlite3.Error, mysql.connector.Error) as e:
            logger.warning("Error while closing attendance store: %s", e)
        logger.info("Closed attendance store %s", self._config.describe())

    def __enter__(self) -> "DatabaseConnection":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _connect(self):
        if self._config.backend == BACKEND_SQLITE:
            return self._connect_sqlite()
        return self._connect_mysql()

    def _connect_sqlite(self):
        path = self._config.path
        try:
            if path != ":memory:":
                Path(path).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)
            # The ledger lock serializes access, so the handle may cross threads.
            return sqlite3.connect(path, check_same_thread=False)
        except (OSError, sqlite3.Error) as e:
            raise StorageUnavailableError(f"Cannot open attendance store {path}: {e}") from e

    def _connect_mysql(self):
        try:
            return mysql.connector.connect(
                host=self._config.host,
                port=int(self._config.port),
                user=self._config.user,
                password=self._config.password,
                database=self._config.database,
            )
        except mysql.connector.Error as e:
            raise StorageUnavailableError(
                f"Cannot open attendance store {self._config.describe()}: {e}"
            ) from e
