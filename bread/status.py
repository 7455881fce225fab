"""
Status report helpers for the passage cache.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import BIBLE_IDS
from .model import ScheduleEntry
from .paths import translation_dir
from .store import has_passage, list_cached_dates
from .util import info, warn


def cache_stats(passages_dir: Path) -> List[Tuple[str, int]]:
    """
    Return a list of (translation, cached_date_count) for every known translation.
    """
    return [
        (name, len(list_cached_dates(translation_dir(passages_dir, name))))
        for name in BIBLE_IDS
    ]


def missing_dates(entries: Iterable[ScheduleEntry], out_dir: Path) -> List[ScheduleEntry]:
    """Schedule entries that have no cached record yet."""
    return [e for e in entries if not has_passage(out_dir, e.date)]


def print_status(
    passages_dir: Path,
    entries: Optional[List[ScheduleEntry]] = None,
    translation: Optional[str] = None,
) -> None:
    """
    Print a human-readable status report:

    - passages directory
    - cached record counts per translation
    - schedule dates still missing (when entries are given)
    """
    info(f"Passages directory: {passages_dir}")

    info("Cached passages per translation:")
    for name, count in cache_stats(passages_dir):
        print(f"  - {name}: {count} date(s)")

    if entries is None:
        return

    names = [translation] if translation else list(BIBLE_IDS)
    for name in names:
        missing = missing_dates(entries, translation_dir(passages_dir, name))
        if not missing:
            info(f"{name}: all {len(entries)} schedule date(s) cached.")
            continue
        warn(f"{name}: {len(missing)} of {len(entries)} schedule date(s) missing.")
        for e in missing[:10]:
            print(f"  - {e.date}: {e.passage}")
        if len(missing) > 10:
            print(f"  ... and {len(missing) - 10} more")
