from __future__ import annotations

from enum import Enum


class RollStatus(str, Enum):
    """Result of looking a roll number up in the ledger."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_MARKED = "ALREADY_MARKED"
    UNMARKED = "UNMARKED"


class MarkStatus(str, Enum):
    """Outcome of a mark attempt."""

    NOT_FOUND = "NOT_FOUND"
    ALREADY_MARKED = "ALREADY_MARKED"
    MARKED_NOW = "MARKED_NOW"
