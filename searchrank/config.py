from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------
# Paths
# ---------------------------

PROJECT_ROOT = Path(__file__).resolve().parents[1]

CONFIG_DIR = PROJECT_ROOT / "config"
SOURCES_PATH = Path(os.getenv("SEARCHRANK_SOURCES_PATH", str(CONFIG_DIR / "sources.json")))


# ---------------------------
# Relevance ladder (base scores)
# ---------------------------

SCORE_EXACT = 100.0
SCORE_PREFIX = 80.0
SCORE_SUBSTRING = 60.0

# subsequence: SUBSEQ_BASE + similarity * SUBSEQ_SPAN  -> 20..40
SUBSEQ_BASE = 20.0
SUBSEQ_SPAN = 20.0

# partial overlap: ratio * PARTIAL_SPAN -> 0..15
PARTIAL_SPAN = 15.0

SCORE_CAP = 110.0


# ---------------------------
# Bonuses
# ---------------------------

# (max year diff inclusive, bonus); diff <= 5 is handled as 10 - diff
RECENCY_TOP_WINDOW = 5
RECENCY_TOP_BONUS = 10.0
RECENCY_STEPS = [
    (10, 5.0),
    (20, 2.0),
]

RATING_BONUS = 5.0

# Optional fixed clock for the recency bonus (reproducible ranking / tests)
_current_year_env = os.getenv("SEARCHRANK_CURRENT_YEAR", "").strip()
CURRENT_YEAR_OVERRIDE: Optional[int] = int(_current_year_env) if _current_year_env.isdigit() else None


# ---------------------------
# Relevance tiers
# ---------------------------

TIER_EXACT_MIN = 80.0
TIER_HIGH_MIN = 60.0
TIER_MEDIUM_MIN = 40.0

TIER_NAMES: List[str] = ["exact", "high", "medium", "low"]


# ---------------------------
# Result filters
# ---------------------------

STRICT_MAX_EDIT_DISTANCE = 2

# Category names (type_name) that mark adult content on MacCMS sources
ADULT_TYPE_KEYWORDS: List[str] = [
    "伦理片",
    "福利",
    "里番动漫",
    "门事件",
    "萝莉少女",
    "制服诱惑",
    "国产传媒",
    "黑丝诱惑",
    "无码",
    "有码",
    "网红主播",
    "色情片",
    "同性片",
    "写真热舞",
    "三级片",
]


# ---------------------------
# Batch CLI
# ---------------------------

# Batch queries longer than this are cut before scoring; the edit-distance
# table grows with len(query) * len(title)
MAX_QUERY_CHARS = 120


# ---------------------------
# Upstream HTTP hardening
# ---------------------------

HTTP_CONNECT_TIMEOUT = 3.0
HTTP_READ_TIMEOUT = 8.0
HTTP_MAX_REDIRECTS = 2
HTTP_MAX_BYTES = 2_000_000  # 2 MB cap

HTTP_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)

# Proxy response caching hint (seconds)
SEARCH_CACHE_MAX_AGE = 300


# ---------------------------
# Pydantic models shared around the app
# ---------------------------

class SearchResult(BaseModel):
    """
    A single search result as returned by an upstream source.

    Only ``title``, ``year`` and ``douban_id`` feed the relevance score;
    everything else is carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: str = ""
    title: str = ""
    year: Optional[Union[str, int]] = None
    douban_id: Optional[Union[int, str]] = None
    poster: str = ""
    source: str = ""
    source_name: str = ""
    type_name: str = ""
    desc: str = ""
    remarks: str = ""
    episodes: List[str] = Field(default_factory=list)


class SourceConfig(BaseModel):
    """
    One configured upstream search source (MacCMS-style API).
    """

    key: str = Field(..., min_length=1)
    name: str
    api: str = Field(..., min_length=1)
    detail: Optional[str] = None
    disabled: bool = False
    is_adult: bool = False


class RankRequest(BaseModel):
    query: str = Field(..., min_length=1)
    results: List[SearchResult] = Field(default_factory=list)
    strict: bool = False
    current_year: Optional[int] = None


class RankResponse(BaseModel):
    """
    Response body for POST /rank.
    """

    query: str
    results: List[SearchResult]
    total: int


class GroupRequest(BaseModel):
    query: str = Field(..., min_length=1)
    results: List[SearchResult] = Field(default_factory=list)
    current_year: Optional[int] = None


class GroupedResponse(BaseModel):
    """
    Response body for POST /rank/grouped.
    """

    query: str
    exact: List[SearchResult]
    high: List[SearchResult]
    medium: List[SearchResult]
    low: List[SearchResult]


class HealthResponse(BaseModel):
    """
    Response body for GET /health.
    """

    status: str
