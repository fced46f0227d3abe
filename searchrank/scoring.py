from __future__ import annotations

"""
Relevance scoring for search results.

A candidate's score is a base score from the first matching rule of the
match ladder, plus a recency bonus and an external-rating bonus, capped
at ``SCORE_CAP``:

    exact        100
    prefix        80
    substring     60
    subsequence   20..40  (20 + similarity * 20)
    partial        0..15  (share of query chars found in the title)

    recency      +10..+5 (<= 5 years), +5 (<= 10), +2 (<= 20), else 0
    rating       +5 when a positive douban id is present

Both title and query are compared trimmed and with all whitespace removed.
"""

import datetime as _dt
from dataclasses import dataclass
from typing import Any, Callable, List, Optional

from . import config
from .normalize import clean_title, has_rating, parse_year, strip_spaces
from .text_utils import contains_chars_in_order, similarity_score


def get_field(candidate: Any, name: str, default: Any = None) -> Any:
    """Read a field from a pydantic model, a plain object or a dict."""
    if candidate is None:
        return default
    if isinstance(candidate, dict):
        return candidate.get(name, default)
    return getattr(candidate, name, default)


def current_year() -> int:
    if config.CURRENT_YEAR_OVERRIDE is not None:
        return config.CURRENT_YEAR_OVERRIDE
    return _dt.date.today().year


# ---------------------------------------------------------------------------
# Match ladder
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MatchTexts:
    title: str
    query: str
    title_ns: str
    query_ns: str


@dataclass(frozen=True)
class MatchRule:
    name: str
    matches: Callable[[MatchTexts], bool]
    score: Callable[[MatchTexts], float]


def _is_exact(t: MatchTexts) -> bool:
    return t.title == t.query or t.title_ns == t.query_ns


def _is_prefix(t: MatchTexts) -> bool:
    return t.title.startswith(t.query) or t.title_ns.startswith(t.query_ns)


def _is_substring(t: MatchTexts) -> bool:
    return t.query in t.title or t.query_ns in t.title_ns


def _is_subsequence(t: MatchTexts) -> bool:
    return contains_chars_in_order(t.title_ns, t.query_ns)


def _subsequence_score(t: MatchTexts) -> float:
    return config.SUBSEQ_BASE + similarity_score(t.title_ns, t.query_ns) * config.SUBSEQ_SPAN


def _partial_score(t: MatchTexts) -> float:
    # Repeated query characters each count: '哈哈' vs '哈' is 2/2, not 1/1.
    if not t.query_ns:
        return 0.0
    matched = sum(1 for ch in t.query_ns if ch in t.title_ns)
    return matched / len(t.query_ns) * config.PARTIAL_SPAN


MATCH_LADDER: List[MatchRule] = [
    MatchRule("exact", _is_exact, lambda t: config.SCORE_EXACT),
    MatchRule("prefix", _is_prefix, lambda t: config.SCORE_PREFIX),
    MatchRule("substring", _is_substring, lambda t: config.SCORE_SUBSTRING),
    MatchRule("subsequence", _is_subsequence, _subsequence_score),
    MatchRule("partial", lambda t: True, _partial_score),
]


def build_match_texts(title: Any, query: Any) -> Optional[MatchTexts]:
    """Return the comparison forms, or None when either side is blank."""
    t = clean_title(title)
    q = clean_title(query)
    if not t or not q:
        return None
    return MatchTexts(title=t, query=q, title_ns=strip_spaces(t), query_ns=strip_spaces(q))


def _first_rule(texts: MatchTexts) -> MatchRule:
    for rule in MATCH_LADDER:
        if rule.matches(texts):
            return rule
    return MATCH_LADDER[-1]


def match_rule(title: Any, query: Any) -> Optional[str]:
    """Name of the ladder rule that fires, or None for a blank title/query."""
    texts = build_match_texts(title, query)
    if texts is None:
        return None
    return _first_rule(texts).name


def base_score(title: Any, query: Any) -> float:
    texts = build_match_texts(title, query)
    if texts is None:
        return 0.0
    return float(_first_rule(texts).score(texts))


# ---------------------------------------------------------------------------
# Bonuses
# ---------------------------------------------------------------------------

def recency_bonus(year: Any, now_year: Optional[int] = None) -> float:
    y = parse_year(year)
    if y <= 0:
        return 0.0
    if now_year is None:
        now_year = current_year()
    diff = now_year - y
    if diff < 0:
        return 0.0
    if diff <= config.RECENCY_TOP_WINDOW:
        return config.RECENCY_TOP_BONUS - diff
    for max_diff, bonus in config.RECENCY_STEPS:
        if diff <= max_diff:
            return bonus
    return 0.0


def rating_bonus(douban_id: Any) -> float:
    return config.RATING_BONUS if has_rating(douban_id) else 0.0


# ---------------------------------------------------------------------------
# Public entry
# ---------------------------------------------------------------------------

def calculate_relevance_score(
    candidate: Any,
    query: str,
    now_year: Optional[int] = None,
) -> float:
    """
    Score one candidate against ``query``; 0 when title or query is blank.
    Never raises on malformed candidates.
    """
    texts = build_match_texts(get_field(candidate, "title"), query)
    if texts is None:
        return 0.0

    score = float(_first_rule(texts).score(texts))
    score += recency_bonus(get_field(candidate, "year"), now_year)
    score += rating_bonus(get_field(candidate, "douban_id"))

    return min(score, config.SCORE_CAP)
