from __future__ import annotations

"""
Post-ranking result filters used by the search proxy.

* filter_adult   - drop adult sources / categories
* filter_strict  - keep only titles that closely match the query
"""

import re
from typing import Any, Iterable, List, Optional, Sequence

from . import config
from .scoring import get_field
from .text_utils import levenshtein_distance


def is_adult_type(type_name: str, keywords: Sequence[str] = config.ADULT_TYPE_KEYWORDS) -> bool:
    type_name = type_name or ""
    return any(word in type_name for word in keywords)


def filter_adult(
    results: Iterable[Any],
    source: Optional[Any] = None,
    keywords: Sequence[str] = config.ADULT_TYPE_KEYWORDS,
) -> List[Any]:
    """
    Remove adult content: everything from a source flagged ``is_adult``,
    otherwise results whose category name hits the keyword list.
    """
    if source is not None and bool(get_field(source, "is_adult", False)):
        return []
    return [r for r in results if not is_adult_type(get_field(r, "type_name") or "", keywords)]


def is_strict_match(
    title: str,
    query: str,
    max_distance: int = config.STRICT_MAX_EDIT_DISTANCE,
) -> bool:
    t = (title or "").lower().strip()
    q = (query or "").lower().strip()

    if t == q or t.startswith(q):
        return True
    if re.search(r"\b" + re.escape(q) + r"\b", t, flags=re.IGNORECASE | re.ASCII):
        return True
    return levenshtein_distance(t, q) <= max_distance


def filter_strict(
    results: Iterable[Any],
    query: str,
    max_distance: int = config.STRICT_MAX_EDIT_DISTANCE,
) -> List[Any]:
    """Keep results whose title is a near match for ``query``; order preserved."""
    return [
        r for r in results
        if is_strict_match(str(get_field(r, "title") or ""), query, max_distance)
    ]
