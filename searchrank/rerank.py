# searchrank/rerank.py
from __future__ import annotations

from typing import Any, Iterable, List, Optional, Tuple

from loguru import logger

from .normalize import parse_year
from .pipeline_types import ScoredCandidate
from .scoring import calculate_relevance_score, current_year, get_field


# ---------------------------------------------------------------------------
# Deterministic ordering
# ---------------------------------------------------------------------------

def _title_key(result: Any) -> Tuple[str, str]:
    title = get_field(result, "title") or ""
    if not isinstance(title, str):
        title = str(title)
    # case-insensitive first; on a caseless tie lowercase sorts ahead of uppercase
    return (title.casefold(), title.swapcase())


def _sort_key(sc: ScoredCandidate):
    # score desc, year desc (missing -> 0), title asc
    return (-sc.score, -sc.year, _title_key(sc.result))


# ---------------------------------------------------------------------------
# Main entry
# ---------------------------------------------------------------------------

def score_candidates(
    results: Optional[Iterable[Any]],
    query: str,
    now_year: Optional[int] = None,
) -> List[ScoredCandidate]:
    """
    Score every result once and return them sorted:
      1) relevance score, highest first
      2) year, newest first (undated items last)
      3) title, ascending, case-insensitive
    """
    if not results:
        return []
    if now_year is None:
        now_year = current_year()

    scored = [
        ScoredCandidate(
            result=r,
            score=calculate_relevance_score(r, query or "", now_year),
            year=parse_year(get_field(r, "year")),
        )
        for r in results
    ]
    scored.sort(key=_sort_key)

    if scored:
        logger.debug(
            "Ranked {} results for '{}' (top score={:.1f})",
            len(scored),
            query,
            scored[0].score,
        )
    return scored


def rank_search_results(
    results: Optional[Iterable[Any]],
    query: str,
    now_year: Optional[int] = None,
) -> List[Any]:
    """Return the same results reordered by relevance; None/empty -> []."""
    return [sc.result for sc in score_candidates(results, query, now_year)]
