from __future__ import annotations

import csv
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..common.normalizers import normalize_roll_number
from ..core.enums import MarkStatus, RollStatus
from ..core.exceptions import ImportIOError, StorageError, StorageUnavailableError
from .model import AttendeeRecord, LedgerSummary, MarkResult
from .repository import AttendeeRepository

logger = logging.getLogger(__name__)

SnapshotRow = Union[AttendeeRecord, Tuple[str, bool]]


class AttendanceLedger:
    """Roll number -> marked mapping over a durable repository.

    The in-memory mirror is only ever derived from storage: it is rebuilt on
    ``initialize`` and updated after each durable write succeeds. One
    re-entrant lock covers every operation, so concurrent marks of the same
    roll number cannot both observe it unmarked.
    """

    def __init__(self, repository: AttendeeRepository):
        self._repo = repository
        self._mirror: Dict[str, bool] = {}
        self._ready = False
        self._lock = threading.RLock()

    @property
    def is_ready(self) -> bool:
        return self._ready

    def initialize(self, snapshot: Optional[Iterable[SnapshotRow]] = None) -> None:
        with self._lock:
            try:
                self._repo.ensure_schema()
                if snapshot is not None and self._repo.count() == 0:
                    seeded = self._seed(snapshot)
                    logger.info("Seeded attendance store with %d roll numbers", seeded)
                self._reload()
            except StorageUnavailableError:
                raise
            except StorageError as e:
                logger.error("Attendance store unavailable: %s", e)
                raise StorageUnavailableError(f"Attendance store unavailable: {e}") from e

            self._ready = True
            logger.info("Attendance ledger ready with %d roll numbers", len(self._mirror))

    def _reload(self) -> None:
        mirror: Dict[str, bool] = {}
        for roll_number, marked in self._repo.all_rows():
            mirror[normalize_roll_number(roll_number)] = bool(marked)
        self._mirror = mirror

    def _seed(self, snapshot: Iterable[SnapshotRow]) -> int:
        rows: List[Tuple[str, bool]] = []
        for row in snapshot:
            if isinstance(row, AttendeeRecord):
                raw, marked = row.roll_number, row.marked
            else:
                raw, marked = row
            roll_number = normalize_roll_number(raw)
            if roll_number:
                rows.append((roll_number, bool(marked)))
        # Single transaction; a failed seed leaves the store empty.
        return self._repo.insert_many(rows)

    def _require_ready(self) -> None:
        if not self._ready:
            raise StorageUnavailableError("Attendance ledger is not initialized")

    def lookup(self, raw: object) -> RollStatus:
        with self._lock:
            self._require_ready()
            return self._status_of(normalize_roll_number(raw))

    def _status_of(self, roll_number: str) -> RollStatus:
        if not roll_number or roll_number not in self._mirror:
            return RollStatus.NOT_FOUND
        if self._mirror[roll_number]:
            return RollStatus.ALREADY_MARKED
        return RollStatus.UNMARKED

    def mark_attended(self, raw: object) -> MarkResult:
        with self._lock:
            self._require_ready()
            roll_number = normalize_roll_number(raw)
            prior = self._status_of(roll_number)

            if prior == RollStatus.NOT_FOUND:
                return MarkResult(roll_number, MarkStatus.NOT_FOUND, prior)
            if prior == RollStatus.ALREADY_MARKED:
                return MarkResult(roll_number, MarkStatus.ALREADY_MARKED, prior)

            # Storage first; the mirror follows only a committed write.
            if not self._repo.mark(roll_number):
                logger.warning("Roll No %s changed in storage; reloading mirror", roll_number)
                self._reload()
                current = self._status_of(roll_number)
                status = MarkStatus.NOT_FOUND if current == RollStatus.NOT_FOUND else MarkStatus.ALREADY_MARKED
                return MarkResult(roll_number, status, current)

            self._mirror[roll_number] = True
            logger.info("Marked attendance for %s", roll_number)
            return MarkResult(roll_number, MarkStatus.MARKED_NOW, prior)

    def import_roll_numbers(self, rows: Iterable[object]) -> int:
        """Insert-if-absent every non-empty row; returns the number of rows processed.

        Existing roll numbers keep their marked flag, so re-importing a file is
        safe. On failure, rows already processed stay and ``ImportIOError``
        reports how many there were.
        """

        with self._lock:
            self._require_ready()
            imported = 0
            stale = False
            try:
                for raw in rows:
                    roll_number = normalize_roll_number(raw)
                    if not roll_number:
                        continue
                    if self._repo.insert_if_absent(roll_number):
                        self._mirror.setdefault(roll_number, False)
                    elif roll_number not in self._mirror:
                        stale = True
                    imported += 1
            except (StorageError, OSError, UnicodeDecodeError, csv.Error) as e:
                logger.error("Import stopped after %d rows: %s", imported, e)
                raise ImportIOError(f"Import failed after {imported} rows: {e}", imported=imported) from e

            if stale:
                self._reload()
            logger.info("Imported %d roll numbers", imported)
            return imported

    def reset_all(self) -> None:
        with self._lock:
            self._require_ready()
            changed = self._repo.reset_all()
            for roll_number in self._mirror:
                self._mirror[roll_number] = False
            logger.info("Reset attendance (%d rows changed)", changed)

    def all_records(self) -> List[AttendeeRecord]:
        with self._lock:
            self._require_ready()
            return [AttendeeRecord(roll_number=r, marked=m) for r, m in self._mirror.items()]

    def export_snapshot(self) -> List[Tuple[str, int]]:
        return [(r.roll_number, r.marked_flag) for r in self.all_records()]

    def summary(self) -> LedgerSummary:
        with self._lock:
            self._require_ready()
            return LedgerSummary(total=len(self._mirror), marked=sum(1 for m in self._mirror.values() if m))

    def close(self) -> None:
        with self._lock:
            self._ready = False
            self._mirror = {}
            self._repo.close()

    def __enter__(self) -> "AttendanceLedger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
