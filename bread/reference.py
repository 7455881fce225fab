"""
Reference parser for reading plan citations.

Turns citations such as

    "Psalm 32"
    "Romans 8:1-17"
    "John 9:1-12, 35-41"
    "Philemon 1-25"
    "Matthew 9:35-10:15"

into a PassageRange whose passage_id is what API.Bible expects
('JHN.9.1-JHN.9.41').

Public API:

- parse_reference(ref) -> Optional[PassageRange]
- parse_passage_ref(ref) -> Optional[str]
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from .books import is_single_chapter, lookup_book
from .model import PassageRange
from .util import warn

# (book_name, book_code, regex groups after the book) -> PassageRange
Builder = Callable[[str, str, Tuple[str, ...]], PassageRange]

_BOOK = r"(.+?)\s+"


def _comma_ranges(name: str, code: str, g: Tuple[str, ...]) -> PassageRange:
    # Only the outer bounds survive: "9:1-12, 35-41" -> 9:1-41
    chapter, start, _end1, _start2, end = g
    return PassageRange(code, int(chapter), int(start), int(chapter), int(end))


def _verse_range(name: str, code: str, g: Tuple[str, ...]) -> PassageRange:
    chapter, start, end = g
    return PassageRange(code, int(chapter), int(start), int(chapter), int(end))


def _whole_chapter(name: str, code: str, g: Tuple[str, ...]) -> PassageRange:
    (chapter,) = g
    return PassageRange(code, int(chapter))


def _bare_range(name: str, code: str, g: Tuple[str, ...]) -> PassageRange:
    start, end = g
    if is_single_chapter(name):
        return PassageRange(code, 1, int(start), 1, int(end))
    # Chapter range: only the first chapter is fetched
    return PassageRange(code, int(start))


def _cross_chapter(name: str, code: str, g: Tuple[str, ...]) -> PassageRange:
    start_ch, start_v, end_ch, end_v = g
    return PassageRange(code, int(start_ch), int(start_v), int(end_ch), int(end_v))


# Order matters: first full match wins.
PATTERNS: List[Tuple["re.Pattern[str]", Builder]] = [
    (re.compile(_BOOK + r"(\d+):(\d+)-(\d+),\s*(\d+)-(\d+)"), _comma_ranges),
    (re.compile(_BOOK + r"(\d+):(\d+)-(\d+)"), _verse_range),
    (re.compile(_BOOK + r"(\d+)"), _whole_chapter),
    (re.compile(_BOOK + r"(\d+)-(\d+)"), _bare_range),
    (re.compile(_BOOK + r"(\d+):(\d+)-(\d+):(\d+)"), _cross_chapter),
]


def parse_reference(ref: str) -> Optional[PassageRange]:
    """
    Parse a citation into a PassageRange.

    Returns None when no pattern matches (a warning is printed) or when the
    book name is not in the book index (silent; the caller reports it).
    """
    for pattern, build in PATTERNS:
        m = pattern.fullmatch(ref)
        if not m:
            continue
        name = m.group(1)
        code = lookup_book(name)
        if code is None:
            return None
        return build(name, code, m.groups()[1:])

    warn(f'Could not parse passage reference: "{ref}"')
    return None


def parse_passage_ref(ref: str) -> Optional[str]:
    """Parse a citation straight to its API.Bible passage id."""
    rng = parse_reference(ref)
    return rng.passage_id if rng is not None else None
