from __future__ import annotations

import mysql.connector
import pytest

from src.roll_attendance.roll_attendance.attendees.mysql_attendee_repository import MySQLAttendeeRepository
from src.roll_attendance.roll_attendance.core.exceptions import StorageError


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0
        self._result = []

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.error:
            raise self._conn.error
        self.rowcount = self._conn.rowcount
        self._result = list(self._conn.result)

    def fetchone(self):
        return self._result[0] if self._result else None

    def fetchall(self):
        return self._result

    def close(self):
        pass


class FakeConnection:
    def __init__(self):
        self.executed = []
        self.rowcount = 1
        self.result = []
        self.error = None
        self.commits = 0
        self.rollbacks = 0

    def cursor(self):
        return FakeCursor(self)

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


class FakeConnFactory:
    def __init__(self):
        self.connection = FakeConnection()
        self.opened = False
        self.closed = False

    def open(self):
        self.opened = True
        return self.connection

    def close(self):
        self.closed = True


def test_ensure_schema_creates_attendees_table():
    factory = FakeConnFactory()
    MySQLAttendeeRepository(factory).ensure_schema()

    sql, _ = factory.connection.executed[0]
    assert factory.opened
    assert sql.startswith("CREATE TABLE IF NOT EXISTS Attendees")
    assert "rollno VARCHAR(64) NOT NULL PRIMARY KEY" in sql


def test_insert_uses_insert_ignore():
    factory = FakeConnFactory()
    factory.connection.rowcount = 0

    inserted = MySQLAttendeeRepository(factory).insert_if_absent("A1")

    assert inserted is False
    assert factory.connection.executed == [
        ("INSERT IGNORE INTO Attendees (rollno, marked) VALUES (%s, %s)", ("A1", 0)),
    ]
    assert factory.connection.commits == 1


def test_mark_guards_on_unmarked():
    factory = FakeConnFactory()

    assert MySQLAttendeeRepository(factory).mark("A1") is True
    sql, params = factory.connection.executed[0]
    assert sql == "UPDATE Attendees SET marked = 1 WHERE rollno = %s AND marked = 0"
    assert params == ("A1",)


def test_all_rows_converts_flags():
    factory = FakeConnFactory()
    factory.connection.result = [("A1", 1), ("A2", 0)]

    assert MySQLAttendeeRepository(factory).all_rows() == [("A1", True), ("A2", False)]


def test_driver_error_rolls_back_and_surfaces():
    factory = FakeConnFactory()
    factory.connection.error = mysql.connector.Error("Lost connection to MySQL server")

    with pytest.raises(StorageError):
        MySQLAttendeeRepository(factory).reset_all()

    assert factory.connection.rollbacks == 1
    assert factory.connection.commits == 0


def test_close_releases_connection():
    factory = FakeConnFactory()
    MySQLAttendeeRepository(factory).close()
    assert factory.closed


def test_insert_many_commits_once():
    factory = FakeConnFactory()

    inserted = MySQLAttendeeRepository(factory).insert_many([("A1", False), ("A2", True)])

    assert inserted == 2
    assert [params for _, params in factory.connection.executed] == [("A1", 0), ("A2", 1)]
    assert factory.connection.commits == 1


def test_insert_many_failure_rolls_back():
    factory = FakeConnFactory()
    factory.connection.error = mysql.connector.Error("Deadlock found")

    with pytest.raises(StorageError):
        MySQLAttendeeRepository(factory).insert_many([("A1", False), ("A2", False)])

    assert factory.connection.rollbacks == 1
    assert factory.connection.commits == 0
