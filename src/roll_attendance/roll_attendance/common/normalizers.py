from __future__ import annotations

from typing import Any


def normalize_roll_number(value: Any) -> str:
    """Trim and uppercase a raw roll number; ``None`` becomes ``""``."""

    if value is None:
        return ""
    return str(value).strip().upper()


def parse_marked_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return int(value) == 1
    return str(value).strip().lower() in {"1", "true", "yes", "y"}
