"""Typed containers shared across ranking modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class ScoredCandidate:
    """A search result paired with its relevance score for one ranking call."""

    result: Any
    score: float
    year: int = 0


@dataclass
class RelevanceGroups:
    exact: List[Any] = field(default_factory=list)
    high: List[Any] = field(default_factory=list)
    medium: List[Any] = field(default_factory=list)
    low: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.exact) + len(self.high) + len(self.medium) + len(self.low)

    def as_dict(self) -> dict[str, List[Any]]:
        return {
            "exact": list(self.exact),
            "high": list(self.high),
            "medium": list(self.medium),
            "low": list(self.low),
        }
