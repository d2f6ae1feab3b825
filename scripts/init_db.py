from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roll_attendance.roll_attendance.container import build_container
from src.roll_attendance.roll_attendance.database.bootstrap import load_snapshot


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    with build_container(db_config=db_config) as container:
        container.ledger.initialize(load_snapshot(getattr(settings, "SEED_SNAPSHOT", None)))
        summary = container.ledger.summary()
        print(
            f"OK: Attendance store ready -> {container.conn.config.describe()} "
            f"(roll numbers={summary.total}, marked={summary.marked})"
        )


if __name__ == "__main__":
    main()
