from __future__ import annotations

import sqlite3

import pytest

from src.roll_attendance.roll_attendance.container import build_container
from src.roll_attendance.roll_attendance.core.enums import MarkStatus, RollStatus
from src.roll_attendance.roll_attendance.core.exceptions import StorageUnavailableError


def test_initialize_creates_store_file(sqlite_container, db_path):
    sqlite_container.ledger.initialize()

    assert db_path.exists()
    with sqlite3.connect(db_path) as conn:
        columns = [row[1] for row in conn.execute("PRAGMA table_info(Attendees)")]
    assert columns == ["rollno", "marked"]


def test_marks_survive_restart(db_path):
    with build_container(db_config={"backend": "sqlite", "path": str(db_path)}) as container:
        container.ledger.initialize([("A1", False), ("A2", False)])
        assert container.ledger.mark_attended("a2").status == MarkStatus.MARKED_NOW

    with build_container(db_config={"backend": "sqlite", "path": str(db_path)}) as container:
        container.ledger.initialize([("Z9", True)])
        assert container.ledger.lookup("A2") == RollStatus.ALREADY_MARKED
        assert container.ledger.lookup("A1") == RollStatus.UNMARKED
        assert container.ledger.lookup("Z9") == RollStatus.NOT_FOUND


def test_storage_keeps_insertion_order(sqlite_container):
    ledger = sqlite_container.ledger
    ledger.initialize([("C3", False), ("A1", True)])
    ledger.import_roll_numbers(["b2", "a1"])

    assert sqlite_container.attendees_repo.all_rows() == [("C3", False), ("A1", True), ("B2", False)]
    assert ledger.export_snapshot() == [("C3", 0), ("A1", 1), ("B2", 0)]


def test_insert_if_absent_never_overwrites(sqlite_container):
    repo = sqlite_container.attendees_repo
    sqlite_container.ledger.initialize()

    assert repo.insert_if_absent("A1", marked=True) is True
    assert repo.insert_if_absent("A1") is False
    assert repo.all_rows() == [("A1", True)]


def test_mark_only_flips_unmarked_rows(sqlite_container):
    repo = sqlite_container.attendees_repo
    sqlite_container.ledger.initialize([("A1", False)])

    assert repo.mark("A1") is True
    assert repo.mark("A1") is False
    assert repo.mark("NOPE") is False


def test_reset_all_clears_storage(sqlite_container, db_path):
    ledger = sqlite_container.ledger
    ledger.initialize([("A1", True), ("A2", True), ("A3", False)])

    ledger.reset_all()

    with sqlite3.connect(db_path) as conn:
        flags = [row[0] for row in conn.execute("SELECT marked FROM Attendees")]
    assert flags == [0, 0, 0]


def test_unopenable_path_is_storage_unavailable(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")

    container = build_container(db_config={"backend": "sqlite", "path": str(blocker / "attendees.db")})
    with pytest.raises(StorageUnavailableError):
        container.ledger.initialize()


def test_unknown_backend_is_rejected():
    with pytest.raises(StorageUnavailableError):
        build_container(db_config={"backend": "oracle"})


def test_close_is_idempotent(sqlite_container):
    sqlite_container.ledger.initialize()

    sqlite_container.close()
    sqlite_container.close()

    assert not sqlite_container.conn.is_open


def test_failed_seed_rolls_back_whole_snapshot(db_path):
    db_path.parent.mkdir(parents=True, exist_ok=True)
    with sqlite3.connect(db_path) as conn:
        conn.execute("CREATE TABLE Attendees (rollno TEXT PRIMARY KEY, marked INTEGER NOT NULL DEFAULT 0)")
        conn.execute(
            """
            CREATE TRIGGER reject_a2 BEFORE INSERT ON Attendees
            WHEN NEW.rollno = 'A2'
            BEGIN SELECT RAISE(ABORT, 'disk I/O error'); END
            """
        )
    conn.close()
    snapshot = [("A1", False), ("A2", False), ("A3", False)]

    with build_container(db_config={"backend": "sqlite", "path": str(db_path)}) as container:
        with pytest.raises(StorageUnavailableError):
            container.ledger.initialize(snapshot)

    with sqlite3.connect(db_path) as conn:
        assert conn.execute("SELECT COUNT(*) FROM Attendees").fetchone()[0] == 0
        conn.execute("DROP TRIGGER reject_a2")
    conn.close()

    with build_container(db_config={"backend": "sqlite", "path": str(db_path)}) as container:
        container.ledger.initialize(snapshot)
        assert [r.roll_number for r in container.ledger.all_records()] == ["A1", "A2", "A3"]
