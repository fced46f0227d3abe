from __future__ import annotations

"""
Text normalisation helpers shared by the scorer, the filters and the
upstream client.

Public helpers:

* clean_title(text) -> str
    Trimmed title / query form used by the exact, prefix and substring rules.
    Missing values (None, NaN from pandas) become "".

* clean_query(text, max_len) -> str
    Query form for batch input. Whitespace runs collapse to one space and
    overlong queries are cut to MAX_QUERY_CHARS.

* strip_spaces(text) -> str
    Same text with every whitespace character removed, so titles written
    with and without word spacing ("斗罗 大陆" / "斗罗大陆") compare equal.

* parse_year(value) -> int
    Leading-integer year parse; anything unparseable becomes 0.

* has_rating(value) -> bool
    True when an external rating id (douban) is a positive number.

* strip_html(text) -> str
    Plain-text view of upstream descriptions.
"""

import re
from typing import Any

from bs4 import BeautifulSoup

from . import config

_WS_RE = re.compile(r"\s+")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def clean_title(text: Any) -> str:
    if text is None or (isinstance(text, float) and text != text):
        return ""
    if not isinstance(text, str):
        text = str(text)
    return text.strip()


def clean_query(text: Any, max_len: int = config.MAX_QUERY_CHARS) -> str:
    return _WS_RE.sub(" ", clean_title(text))[:max_len].strip()


def strip_spaces(text: str) -> str:
    return _WS_RE.sub("", text or "")


def parse_year(value: Any) -> int:
    """
    Parse a year field the lenient way upstream data needs.

    '2020' -> 2020, 2020 -> 2020, '2020-05' -> 2020, '2020年' -> 2020,
    None / '' / 'unknown' -> 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else 0
    m = _LEADING_INT_RE.match(str(value))
    if not m:
        return 0
    return int(m.group(1))


def has_rating(value: Any) -> bool:
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        return value > 0
    try:
        return float(str(value).strip()) > 0
    except ValueError:
        return False


def strip_html(text: str | None) -> str:
    if not text:
        return ""
    soup = BeautifulSoup(text, "html.parser")
    out = soup.get_text(" ", strip=True)
    return _WS_RE.sub(" ", out).strip()
