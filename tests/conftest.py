from __future__ import annotations

import pytest

from src.roll_attendance.roll_attendance.container import build_container


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "instance" / "attendees.db"


@pytest.fixture
def sqlite_container(db_path):
    container = build_container(db_config={"backend": "sqlite", "path": str(db_path)})
    yield container
    container.close()
