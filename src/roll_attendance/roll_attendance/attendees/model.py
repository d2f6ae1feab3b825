from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import MarkStatus, RollStatus


@dataclass(frozen=True)
class AttendeeRecord:
    """Domain entity: one roll number and whether attendance was recorded."""

    roll_number: str
    marked: bool = False

    @property
    def marked_flag(self) -> int:
        return 1 if self.marked else 0


@dataclass(frozen=True)
class MarkResult:
    roll_number: str
    status: MarkStatus
    prior: RollStatus

    @property
    def marked_now(self) -> bool:
        return self.status == MarkStatus.MARKED_NOW


@dataclass(frozen=True)
class LedgerSummary:
    total: int
    marked: int

    @property
    def unmarked(self) -> int:
        return self.total - self.marked
