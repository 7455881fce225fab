"""
On-disk passage cache: one <date>.json per schedule date.

Files are written once and never rewritten; an existing file means the date
is done.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import List

from .model import PassageRecord


def passage_path(out_dir: Path, date: str) -> Path:
    return Path(out_dir) / f"{date}.json"


def has_passage(out_dir: Path, date: str) -> bool:
    return passage_path(out_dir, date).exists()


def write_passage(out_dir: Path, date: str, record: PassageRecord) -> Path:
    """
    Write a passage record as pretty-printed UTF-8 JSON.

    The record is written to a temp file in the same directory and then
    hard-linked into place, so <date>.json only ever appears complete.
    Raises FileExistsError rather than overwrite an existing record.
    """
    path = passage_path(out_dir, date)
    payload = json.dumps(record.to_dict(), ensure_ascii=False, indent=2)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{date}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
        # link() fails if the file appeared since the existence check
        os.link(tmp_name, path)
    finally:
        os.unlink(tmp_name)
    return path


def load_passage(out_dir: Path, date: str) -> PassageRecord:
    path = passage_path(out_dir, date)
    return PassageRecord.from_dict(json.loads(path.read_text(encoding="utf-8")))


def list_cached_dates(out_dir: Path) -> List[str]:
    """Sorted dates (file stems) that already have a record."""
    out_dir = Path(out_dir)
    if not out_dir.is_dir():
        return []
    return sorted(p.stem for p in out_dir.glob("*.json"))
