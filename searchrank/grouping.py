from __future__ import annotations

"""
Relevance tiers for ranked search results.

Callers that want to visually separate strong matches from weak ones can
bucket a ranked list into four tiers:

    exact   score >= 80
    high    60 <= score < 80
    medium  40 <= score < 60
    low     score < 40

Tiers are filled by walking the already-ranked list, so the order inside
each tier is the global rank order.  Scores come from the same ranking
pass; nothing is rescored.
"""

from typing import Any, Iterable, Optional

from . import config
from .pipeline_types import RelevanceGroups
from .rerank import score_candidates


def relevance_tier(score: float) -> str:
    if score >= config.TIER_EXACT_MIN:
        return "exact"
    if score >= config.TIER_HIGH_MIN:
        return "high"
    if score >= config.TIER_MEDIUM_MIN:
        return "medium"
    return "low"


def group_by_relevance(
    results: Optional[Iterable[Any]],
    query: str,
    now_year: Optional[int] = None,
) -> RelevanceGroups:
    groups = RelevanceGroups()
    for sc in score_candidates(results, query, now_year):
        getattr(groups, relevance_tier(sc.score)).append(sc.result)
    return groups
