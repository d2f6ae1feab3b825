from __future__ import annotations

from dataclasses import dataclass

from .attendees.ledger import AttendanceLedger
from .attendees.mysql_attendee_repository import MySQLAttendeeRepository
from .attendees.repository import AttendeeRepository
from .attendees.sqlite_attendee_repository import SQLiteAttendeeRepository
from .core.constants import BACKEND_MYSQL
from .database.connection import DBConfig, DatabaseConnection


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    attendees_repo: AttendeeRepository

    ledger: AttendanceLedger

    def close(self) -> None:
        self.ledger.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_container(*, db_config: dict) -> Container:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config)

    if config.backend == BACKEND_MYSQL:
        attendees_repo: AttendeeRepository = MySQLAttendeeRepository(conn)
    else:
        attendees_repo = SQLiteAttendeeRepository(conn)

    ledger = AttendanceLedger(attendees_repo)

    return Container(
        conn=conn,
        attendees_repo=attendees_repo,
        ledger=ledger,
    )
