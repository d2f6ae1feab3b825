"""CSV collaborators for the ledger.

Import hands the ledger raw data rows (header discarded); export writes the
``RollNo,Marked`` file handed to whatever shares or downloads it.
"""

from __future__ import annotations

import csv
import io
from typing import IO, Iterable, Iterator, List, Sequence, Tuple

from ..common.normalizers import parse_marked_flag
from ..core.constants import CSV_HEADER


def read_roll_numbers(lines: Iterable[str], *, has_header: bool = True) -> Iterator[str]:
    """Yield the first column of every data row.

    Blank rows come through as ``""`` so the caller decides how to skip them.
    """

    reader = csv.reader(lines)
    for index, row in enumerate(reader):
        if index == 0 and has_header:
            continue
        yield row[0] if row else ""


def decode_upload(data: bytes) -> List[str]:
    # utf-8-sig strips the BOM spreadsheet tools like to prepend.
    return data.decode("utf-8-sig").splitlines()


def read_snapshot_rows(lines: Iterable[str]) -> List[Tuple[str, bool]]:
    """Parse a ``RollNo,Marked`` file; a missing Marked column means unmarked."""

    rows: List[Tuple[str, bool]] = []
    reader = csv.reader(lines)
    for index, row in enumerate(reader):
        if index == 0 or not row:
            continue
        marked = parse_marked_flag(row[1]) if len(row) > 1 else False
        rows.append((row[0], marked))
    return rows


def write_export(rows: Sequence[Tuple[str, int]], stream: IO[str]) -> int:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for roll_number, flag in rows:
        writer.writerow([roll_number, int(flag)])
    return len(rows)


def export_csv_bytes(rows: Sequence[Tuple[str, int]]) -> bytes:
    out = io.StringIO()
    write_export(rows, out)
    return out.getvalue().encode("utf-8")
