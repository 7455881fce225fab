"""
Batch driver: walk the reading plan and fill the passage cache.

For each entry, in order:
- skip it if <date>.json already exists
- parse the reference (failure -> error, continue)
- fetch, clean and write (failure -> error, continue)
- sleep config.delay after every successful fetch

Nothing short of a ConfigError (raised before this module runs) stops the
batch; it always ends with a summary line.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Iterable, Optional

import requests

from .api import RetrievalError, fetch_passage
from .clean import clean_html
from .config import RunConfig
from .model import Passage, PassageRecord, ScheduleEntry
from .paths import ensure_output_dir
from .reference import parse_passage_ref
from .store import has_passage, write_passage
from .util import error, info, warn

Fetcher = Callable[[str, RunConfig], Passage]

ENTRY_ERRORS = (RetrievalError, requests.RequestException, OSError, ValueError)


@dataclass
class BatchStats:
    fetched: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def total(self) -> int:
        return self.fetched + self.skipped + self.errors

    def summary(self) -> str:
        return (
            f"Done! Fetched: {self.fetched}, "
            f"Skipped (already exists): {self.skipped}, Errors: {self.errors}"
        )


def process_entry(
    entry: ScheduleEntry,
    passage_id: str,
    config: RunConfig,
    fetch: Fetcher,
) -> None:
    """
    Fetch, clean and store one parsed schedule entry.

    Raises whatever the fetcher or the file write raises.
    """
    info(f"Fetching {entry.date}: {entry.passage} ({passage_id})...")
    passage = fetch(passage_id, config)
    record = PassageRecord(verses=clean_html(passage.content), copyright=passage.copyright)
    write_passage(config.out_dir, entry.date, record)


def run_batch(
    config: RunConfig,
    entries: Iterable[ScheduleEntry],
    fetch: Optional[Fetcher] = None,
    sleep: Callable[[float], None] = time.sleep,
    limit: Optional[int] = None,
    dry_run: bool = False,
) -> BatchStats:
    """
    Process schedule entries sequentially and return the counts.

    Parameters
    ----------
    config:
        RunConfig for this run (key, translation, out_dir, delay).
    entries:
        Schedule entries in file order.
    fetch:
        Passage fetcher; defaults to the API.Bible client (fetch_passage).
    sleep:
        Pause function used for rate limiting.
    limit:
        Stop once this many passages have been fetched.
    dry_run:
        Parse and report only; nothing is fetched or written. Entries that
        would be fetched are counted as skipped.
    """
    if fetch is None:
        fetch = fetch_passage
    ensure_output_dir(config.out_dir)
    stats = BatchStats()

    for entry in entries:
        if limit is not None and stats.fetched >= limit:
            info(f"Stopping after limit={limit} fetch(es).")
            break

        if has_passage(config.out_dir, entry.date):
            stats.skipped += 1
            continue

        passage_id = parse_passage_ref(entry.passage)
        if passage_id is None:
            warn(f'Skipping {entry.date}: could not parse "{entry.passage}"')
            stats.errors += 1
            continue

        if dry_run:
            info(f"[dry-run] {entry.date}: {entry.passage} ({passage_id})")
            stats.skipped += 1
            continue

        try:
            process_entry(entry, passage_id, config, fetch)
        except ENTRY_ERRORS as e:
            error(f"Error fetching {entry.date} ({entry.passage}): {e}")
            stats.errors += 1
            continue

        stats.fetched += 1
        if config.delay > 0:
            sleep(config.delay)

    print()
    info(stats.summary())
    return stats
