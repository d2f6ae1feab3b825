from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from typing import Any, List, Optional, Tuple

import mysql.connector

from ..core.exceptions import StorageError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

DRIVER_ERRORS = (sqlite3.Error, mysql.connector.Error)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection):
    """Yield a cursor on the held connection; commit on success, roll back on error.

    Driver errors surface as ``StorageError``.
    """

    conn = conn_factory.connection
    try:
        cur = conn.cursor()
    except DRIVER_ERRORS as e:
        raise StorageError(f"Cannot obtain cursor: {e}") from e
    try:
        yield cur
        conn.commit()
    except DRIVER_ERRORS as e:
        _rollback(conn)
        raise StorageError(str(e)) from e
    except Exception:
        _rollback(conn)
        raise
    finally:
        try:
            cur.close()
        except DRIVER_ERRORS as e:
            logger.warning("Error while closing cursor: %s", e)


def _rollback(conn) -> None:
    try:
        conn.rollback()
    except DRIVER_ERRORS as e:
        logger.error("Rollback failed: %s", e)


def fetchone(cur) -> Optional[Tuple[Any, ...]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Tuple[Any, ...]]:
    rows = cur.fetchall()
    return list(rows or [])
