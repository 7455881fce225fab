"""
Reading plan import helpers.

This module:
- Opens .csv files via the csv module or .xlsx files via openpyxl.
- Skips the header row.
- Yields ScheduleEntry rows: (date, passage, line_no).

A row looks like:

    2026-01-05,Week 1,Monday,"John 9:1-12, 35-41"

The two middle fields are ignored but must be present. Unquoted references
containing commas are tolerated: trailing CSV fields are joined back.
"""

from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from openpyxl import load_workbook

from .model import ScheduleEntry
from .util import info, warn

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def _strip_quotes(value: str) -> str:
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value.strip()


def parse_row(fields: Sequence[str], line_no: int) -> Optional[ScheduleEntry]:
    """
    Turn one row's fields into a ScheduleEntry, or None if malformed.

    Blank rows return None without a warning.
    """
    cells = ["" if f is None else str(f) for f in fields]
    if not any(c.strip() for c in cells):
        return None

    if len(cells) < 4:
        warn(f"Skipping malformed line {line_no}: {','.join(cells)}")
        return None

    date, first, second = cells[0], cells[1], cells[2]
    passage = _strip_quotes(",".join(cells[3:]))

    if not _DATE_RE.fullmatch(date) or not first or not second or not passage:
        warn(f"Skipping malformed line {line_no}: {','.join(cells)}")
        return None

    return ScheduleEntry(date=date, passage=passage, line_no=line_no)


def iter_schedule(path: Path, sheet_name: Optional[str] = None) -> Iterator[ScheduleEntry]:
    """
    Yield ScheduleEntry objects from a .csv or .xlsx reading plan.

    Raises
    ------
    FileNotFoundError
        The schedule file does not exist.
    ValueError
        Unsupported file extension.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schedule not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        yield from _iter_schedule_csv(path)
    elif suffix in (".xlsx", ".xlsm"):
        yield from _iter_schedule_xlsx(path, sheet_name)
    else:
        raise ValueError(f"Unsupported schedule format: {suffix}. Expected .csv, .xlsx or .xlsm")


def _iter_schedule_csv(csv_path: Path) -> Iterator[ScheduleEntry]:
    info(f"Opening CSV schedule: {csv_path}")
    with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
        reader = csv.reader(f)
        try:
            next(reader)  # header
        except StopIteration:
            warn("Schedule file is empty.")
            return

        for row in reader:
            entry = parse_row(row, reader.line_num)
            if entry is not None:
                yield entry


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    # Date cells come back as datetime objects
    if hasattr(value, "strftime"):
        return value.strftime("%Y-%m-%d")
    return str(value)


def _iter_schedule_xlsx(xlsx_path: Path, sheet_name: Optional[str]) -> Iterator[ScheduleEntry]:
    info(f"Opening Excel schedule: {xlsx_path}")
    wb = load_workbook(filename=str(xlsx_path), read_only=True, data_only=True)
    try:
        if sheet_name is None:
            ws = wb.active
        else:
            if sheet_name not in wb.sheetnames:
                raise ValueError(f"Sheet {sheet_name!r} not found. Available: {wb.sheetnames}")
            ws = wb[sheet_name]
        info(f"Using sheet: {ws.title!r}")

        rows = ws.iter_rows(values_only=True)
        try:
            next(rows)  # header
        except StopIteration:
            warn("Excel sheet is empty.")
            return

        for row_idx, row in enumerate(rows, start=2):
            cells = [_cell_text(v) for v in row]
            # Trailing empty columns are padding, not extra reference text
            while cells and not cells[-1]:
                cells.pop()
            entry = parse_row(cells, row_idx)
            if entry is not None:
                yield entry
    finally:
        wb.close()


def read_schedule(path: Path, sheet_name: Optional[str] = None) -> List[ScheduleEntry]:
    """Load the full reading plan into a list."""
    entries = list(iter_schedule(path, sheet_name=sheet_name))
    info(f"Loaded {len(entries)} schedule entries from {Path(path).name}")
    return entries
