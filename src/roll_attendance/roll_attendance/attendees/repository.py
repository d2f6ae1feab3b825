from __future__ import annotations

from typing import Iterable, Protocol, Sequence, Tuple


class AttendeeRepository(Protocol):
    """Durable store of roll numbers; the system of record for the ledger.

    Roll numbers passed in are already normalized.
    """

    def ensure_schema(self) -> None:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def all_rows(self) -> Sequence[Tuple[str, bool]]:
        """Every (roll_number, marked) pair in storage order."""

        raise NotImplementedError

    def insert_if_absent(self, roll_number: str, *, marked: bool = False) -> bool:
        """Insert a new roll number; an existing row is left untouched."""

        raise NotImplementedError

    def insert_many(self, rows: Iterable[Tuple[str, bool]]) -> int:
        """Insert-if-absent every (roll_number, marked) pair in one transaction."""

        raise NotImplementedError

    def mark(self, roll_number: str) -> bool:
        """Flip an unmarked row to marked. False when nothing changed."""

        raise NotImplementedError

    def reset_all(self) -> int:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError
