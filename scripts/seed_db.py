"""Import roll numbers from a CSV file (first line is a header).

Usage: python scripts/seed_db.py students.csv
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.roll_attendance.roll_attendance.attendees.csv_io import read_roll_numbers
from src.roll_attendance.roll_attendance.container import build_container
from src.roll_attendance.roll_attendance.core.exceptions import ImportIOError


def main() -> None:
    parser = argparse.ArgumentParser(description="Import roll numbers from a CSV file")
    parser.add_argument("csv_file", type=Path)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())

    with build_container(db_config=dict(settings.DB_CONFIG)) as container:
        container.ledger.initialize()
        try:
            with args.csv_file.open("r", encoding="utf-8-sig", newline="") as f:
                imported = container.ledger.import_roll_numbers(read_roll_numbers(f))
        except FileNotFoundError:
            raise SystemExit(f"CSV file not found: {args.csv_file}")
        except ImportIOError as e:
            raise SystemExit(f"Failed to import CSV ({e.imported} rows imported): {e}")

        print(f"OK: Imported {imported} students from {args.csv_file}")


if __name__ == "__main__":
    main()
