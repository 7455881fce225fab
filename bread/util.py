"""
Console output for batch runs.

Progress lines go to stdout with an [info]/[warn]/[ok] tag; per-entry
failures go to stderr as [error] so they stand out from the fetch log.
"""

import sys


def info(msg: str) -> None:
    print(f"[info] {msg}")


def warn(msg: str) -> None:
    """Recoverable problem: a skipped line or an unparsable reference."""
    print(f"[warn] {msg}")


def ok(msg: str) -> None:
    print(f"[ok] {msg}")


def error(msg: str) -> None:
    """Failed entry or fatal configuration problem (stderr)."""
    print(f"[error] {msg}", file=sys.stderr)
