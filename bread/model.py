"""
Data model definitions for the reading plan passage cache.

- PassageRange : a parsed reference, rendered as an API.Bible passage id
- ScheduleEntry: one row of the reading plan
- Passage      : raw HTML + copyright as returned by API.Bible
- PassageRecord: what gets written to <date>.json
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class PassageRange:
    """
    A contiguous span in one book.

    A range with no start_verse is a whole chapter ('PSA.32'). Otherwise both
    ends are given; end_chapter equals start_chapter for a single-chapter span.
    """
    book_code: str
    start_chapter: int
    start_verse: Optional[int] = None
    end_chapter: Optional[int] = None
    end_verse: Optional[int] = None

    @property
    def is_whole_chapter(self) -> bool:
        return self.start_verse is None

    @property
    def passage_id(self) -> str:
        """
        Compute the API.Bible passage id.

        Returns
        -------
        str
            'BOOK.C' or 'BOOK.C1.V1-BOOK.C2.V2'.
        """
        book = self.book_code
        if self.is_whole_chapter:
            return f"{book}.{self.start_chapter}"
        end_chapter = self.end_chapter if self.end_chapter is not None else self.start_chapter
        return (
            f"{book}.{self.start_chapter}.{self.start_verse}"
            f"-{book}.{end_chapter}.{self.end_verse}"
        )


@dataclass(frozen=True)
class ScheduleEntry:
    date: str       # YYYY-MM-DD
    passage: str    # raw reference, quotes stripped
    line_no: int    # for diagnostics


@dataclass(frozen=True)
class Passage:
    content: str
    copyright: str


@dataclass(frozen=True)
class PassageRecord:
    """
    Persisted unit for one schedule date.
    """
    verses: str
    copyright: str

    def to_dict(self) -> Dict[str, str]:
        return {"verses": self.verses, "copyright": self.copyright}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PassageRecord":
        return cls(verses=data["verses"], copyright=data.get("copyright", ""))
