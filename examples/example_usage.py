"""Example: drive the ledger directly (no Flask).

Controllers are a thin layer; the attendance rules live in AttendanceLedger.
"""

from src.roll_attendance.roll_attendance.container import build_container


def main():
    with build_container(db_config={"backend": "sqlite", "path": ":memory:"}) as container:
        ledger = container.ledger
        ledger.initialize([("A1", False), ("A2", True)])

        print(ledger.mark_attended("a1"))
        print(ledger.lookup("A3"))
        print(ledger.import_roll_numbers(["a3", "A1"]))
        ledger.reset_all()
        print(ledger.export_snapshot())


if __name__ == "__main__":
    main()
