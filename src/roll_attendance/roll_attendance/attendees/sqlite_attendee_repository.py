from __future__ import annotations

from typing import Iterable, Sequence, Tuple

from ..core.constants import TABLE_NAME
from ..database.base import db_cursor, fetchall, fetchone
from ..database.connection import DatabaseConnection
from .repository import AttendeeRepository


class SQLiteAttendeeRepository(AttendeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def ensure_schema(self) -> None:
        self._conn_factory.open()
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    rollno TEXT PRIMARY KEY,
                    marked INTEGER NOT NULL DEFAULT 0
                )
                """
            )

    def count(self) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT COUNT(*) FROM {TABLE_NAME}")
            row = fetchone(cur)
            return int(row[0]) if row else 0

    def all_rows(self) -> Sequence[Tuple[str, bool]]:
        # rowid follows insertion order for a table with a TEXT primary key.
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"SELECT rollno, marked FROM {TABLE_NAME} ORDER BY rowid")
            return [(str(r[0]), int(r[1] or 0) == 1) for r in fetchall(cur)]

    def insert_if_absent(self, roll_number: str, *, marked: bool = False) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"INSERT OR IGNORE INTO {TABLE_NAME} (rollno, marked) VALUES (?, ?)",
                (roll_number, 1 if marked else 0),
            )
            return cur.rowcount > 0

    def insert_many(self, rows: Iterable[Tuple[str, bool]]) -> int:
        inserted = 0
        with db_cursor(self._conn_factory) as cur:
            for roll_number, marked in rows:
                cur.execute(
                    f"INSERT OR IGNORE INTO {TABLE_NAME} (rollno, marked) VALUES (?, ?)",
                    (roll_number, 1 if marked else 0),
                )
                inserted += max(cur.rowcount, 0)
        return inserted

    def mark(self, roll_number: str) -> bool:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(
                f"UPDATE {TABLE_NAME} SET marked = 1 WHERE rollno = ? AND marked = 0",
                (roll_number,),
            )
            return cur.rowcount > 0

    def reset_all(self) -> int:
        with db_cursor(self._conn_factory) as cur:
            cur.execute(f"UPDATE {TABLE_NAME} SET marked = 0")
            return int(cur.rowcount)

    def close(self) -> None:
        self._conn_factory.close()
