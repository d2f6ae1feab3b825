from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional, Tuple

from ..attendees.csv_io import read_snapshot_rows
from ..common.normalizers import parse_marked_flag
from ..core.constants import TABLE_NAME
from ..core.exceptions import StorageUnavailableError

logger = logging.getLogger(__name__)

Snapshot = List[Tuple[str, bool]]


def load_snapshot(path: Optional[str | Path]) -> Snapshot:
    """Read the bundled seed data for an empty store.

    ``.db``/``.sqlite`` files are legacy attendee databases with an
    ``Attendees(rollno, marked)`` table; anything else is read as CSV.
    A missing file yields an empty snapshot.
    """

    if not path:
        return []

    path = Path(path)
    if not path.exists():
        logger.warning("Seed snapshot %s not found; starting empty", path)
        return []

    if path.suffix.lower() in {".db", ".sqlite", ".sqlite3"}:
        rows = _load_sqlite_snapshot(path)
    else:
        rows = _load_csv_snapshot(path)

    logger.info("Loaded %d rows from seed snapshot %s", len(rows), path)
    return rows


def _load_csv_snapshot(path: Path) -> Snapshot:
    try:
        with path.open("r", encoding="utf-8-sig", newline="") as f:
            return read_snapshot_rows(f)
    except (OSError, UnicodeDecodeError) as e:
        raise StorageUnavailableError(f"Cannot read seed snapshot {path}: {e}") from e


def _load_sqlite_snapshot(path: Path) -> Snapshot:
    try:
        with closing(sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)) as conn:
            cur = conn.execute(f"SELECT rollno, marked FROM {TABLE_NAME}")
            return [(str(r[0]), parse_marked_flag(r[1])) for r in cur.fetchall()]
    except sqlite3.Error as e:
        raise StorageUnavailableError(f"Cannot read seed snapshot {path}: {e}") from e
