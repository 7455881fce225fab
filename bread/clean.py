"""
Reduce API.Bible passage HTML to the display format stored in <date>.json:

    <p><sup>1</sup>In the beginning ... <sup>2</sup>Now the earth ...<p>...

Only <sup> verse numbers and bare <p> tags survive. Each step is a plain
str -> str function; CLEAN_STEPS runs them in a fixed order.
"""

from __future__ import annotations

import re
from typing import Callable, Tuple

_TITLE_RE = re.compile(r'<p[^>]*class="cl"[^>]*>.*?</p>', re.IGNORECASE)
# API.Bible: <span data-number="1" data-sid="GEN 1:1" class="v">1</span>
_VERSE_RE = re.compile(
    r'<span[^>]*data-number="(\d+)"[^>]*class="[^"]*v[^"]*"[^>]*>\d+</span>',
    re.IGNORECASE,
)
_DIVINE_NAME_RE = re.compile(r'<span[^>]*class="nd"[^>]*>(.*?)</span>', re.IGNORECASE)
_SPAN_OPEN_RE = re.compile(r"<span[^>]*>", re.IGNORECASE)
_SPAN_CLOSE_RE = re.compile(r"</span>", re.IGNORECASE)
_P_OPEN_RE = re.compile(r"<p[^>]*>", re.IGNORECASE)
_OTHER_TAG_RE = re.compile(r"<(?!/?sup)(?!/?p)[^>]+>", re.IGNORECASE)
_WS_RE = re.compile(r"\s+")


def drop_titles(html: str) -> str:
    """Remove psalm/chapter title paragraphs (class="cl"), content included."""
    return _TITLE_RE.sub("", html)


def verse_numbers_to_sup(html: str) -> str:
    return _VERSE_RE.sub(r"<sup>\1</sup>", html)


def unwrap_divine_name(html: str) -> str:
    # "LORD" in small caps
    return _DIVINE_NAME_RE.sub(r"\1", html)


def strip_spans(html: str) -> str:
    return _SPAN_CLOSE_RE.sub("", _SPAN_OPEN_RE.sub("", html))


def bare_paragraphs(html: str) -> str:
    return _P_OPEN_RE.sub("<p>", html)


def strip_other_tags(html: str) -> str:
    return _OTHER_TAG_RE.sub(" ", html)


def collapse_whitespace(text: str) -> str:
    return _WS_RE.sub(" ", text).strip()


# Verse numbers must become <sup> before spans are stripped, or the number
# text would be left behind as plain text.
CLEAN_STEPS: Tuple[Tuple[str, Callable[[str], str]], ...] = (
    ("drop_titles", drop_titles),
    ("verse_numbers_to_sup", verse_numbers_to_sup),
    ("unwrap_divine_name", unwrap_divine_name),
    ("strip_spans", strip_spans),
    ("bare_paragraphs", bare_paragraphs),
    ("strip_other_tags", strip_other_tags),
    ("collapse_whitespace", collapse_whitespace),
)


def clean_html(html: str) -> str:
    """
    Run every step of CLEAN_STEPS over an API.Bible HTML fragment.
    """
    text = html
    for _name, step in CLEAN_STEPS:
        text = step(text)
    return text
