"""Back up attendance as a RollNo,Marked CSV under backups/."""

from __future__ import annotations

import importlib
import sys
from datetime import datetime
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roll_attendance.roll_attendance.attendees.csv_io import write_export
from src.roll_attendance.roll_attendance.container import build_container


def main() -> None:
    settings = importlib.import_module(get_settings_module())

    out_dir = REPO_ROOT / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"attendance_export_{ts}.csv"

    with build_container(db_config=dict(settings.DB_CONFIG)) as container:
        container.ledger.initialize()
        with out_file.open("w", encoding="utf-8", newline="") as f:
            count = write_export(container.ledger.export_snapshot(), f)

    print(f"OK: Backup created: {out_file} ({count} rows)")


if __name__ == "__main__":
    main()
