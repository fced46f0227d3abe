from __future__ import annotations

"""
FastAPI application for the search ranking service.

- /rank            rank caller-supplied results for a query
- /rank/grouped    same, bucketed into exact / high / medium / low tiers
- /tvbox/search    search proxy: fetch from a configured source, filter,
                   rank and answer in MacCMS (TVBox) format
"""

import time
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .config import (
    SEARCH_CACHE_MAX_AGE,
    GroupedResponse,
    GroupRequest,
    HealthResponse,
    RankRequest,
    RankResponse,
    SearchResult,
)
from ._singletons import get_sources
from .filters import filter_adult, filter_strict
from .grouping import group_by_relevance
from .rerank import rank_search_results
from .sources import SourceConfigError, find_source
from .upstream import search_source


# -----------------------
# Search proxy pipeline
# -----------------------

def _error(status: int, msg: str) -> JSONResponse:
    return JSONResponse(status_code=status, content={"code": status, "msg": msg, "list": []})


def to_tvbox_item(r: SearchResult) -> Dict[str, Any]:
    extra = r.model_extra or {}
    return {
        "vod_id": r.id,
        "vod_name": r.title,
        "vod_pic": r.poster,
        "vod_remarks": r.remarks or extra.get("note", "") or "",
        "vod_year": str(r.year) if r.year not in (None, "") else "",
        "vod_area": extra.get("area", "") or "",
        "vod_actor": extra.get("actor", "") or "",
        "vod_director": extra.get("director", "") or "",
        "vod_content": r.desc or "",
        "type_name": r.type_name or "",
        "vod_play_from": "searchrank" if r.episodes else "",
        "vod_play_url": "#".join(r.episodes) if r.episodes else "",
    }


def run_search_pipeline(
    results: List[SearchResult],
    query: str,
    source=None,
    adult_filter: bool = True,
    strict: bool = False,
) -> List[SearchResult]:
    """filter (adult) -> rank -> filter (strict)."""
    if adult_filter:
        before = len(results)
        results = filter_adult(results, source)
        logger.info("Adult filter: {} -> {} (filtered {})", before, len(results), before - len(results))

    if results:
        results = rank_search_results(results, query)

    if strict and results:
        before = len(results)
        results = filter_strict(results, query)
        logger.info("Strict mode: {} -> {}", before, len(results))

    return results


# -----------------------
# FastAPI app + startup
# -----------------------

app = FastAPI()
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=86400,
)


@app.on_event("startup")
def startup_event() -> None:
    logger.info("Starting app warmup...")
    try:
        sources = get_sources()
        logger.info("Search proxy ready with {} sources", len(sources))
    except SourceConfigError as e:
        logger.error("Source configuration is invalid; /tvbox/search will fail: {}", e)
    logger.info("Warmup complete.")


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="healthy")


@app.post("/rank", response_model=RankResponse)
def rank(req: RankRequest) -> RankResponse:
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Query must be non-empty")

    results = rank_search_results(req.results, query, req.current_year)
    if req.strict:
        results = filter_strict(results, query)
    return RankResponse(query=query, results=results, total=len(results))


@app.post("/rank/grouped", response_model=GroupedResponse)
def rank_grouped(req: GroupRequest) -> GroupedResponse:
    query = req.query.strip()
    if not query:
        raise HTTPException(status_code=422, detail="Query must be non-empty")

    groups = group_by_relevance(req.results, query, req.current_year)
    return GroupedResponse(query=query, **groups.as_dict())


@app.get("/tvbox/search")
def tvbox_search(
    source: str | None = Query(default=None),
    wd: str | None = Query(default=None),
    filter: str = Query(default="on"),
    strict: str = Query(default="0"),
):
    start = time.perf_counter()

    if not source or not wd:
        return _error(400, "Missing required parameter: source or wd")

    try:
        target = find_source(get_sources(), source)
    except SourceConfigError as e:
        logger.error("TVBox search: source config error: {}", e)
        return _error(500, str(e))

    if target is None:
        return _error(404, f"Source not found: {source}")
    if target.disabled:
        return _error(403, f"Source is disabled: {source}")

    should_filter = filter in ("on", "enable")
    strict_mode = strict == "1"
    logger.info(
        "TVBox search: source={}, query='{}', filter={}, strict={}",
        source, wd, filter, strict_mode,
    )

    try:
        results = search_source(target, wd)
        logger.info("TVBox search: fetched {} results from upstream", len(results))
        results = run_search_pipeline(results, wd, target, adult_filter=should_filter, strict=strict_mode)
    except Exception as e:
        logger.exception("TVBox search failed: {}", e)
        return _error(500, str(e) or "Search failed")

    elapsed_ms = int((time.perf_counter() - start) * 1000)
    logger.info("TVBox search: completed in {}ms, returning {} results", elapsed_ms, len(results))

    body = {
        "code": 1,
        "msg": "success",
        "page": 1,
        "pagecount": 1,
        "limit": len(results),
        "total": len(results),
        "list": [to_tvbox_item(r) for r in results],
    }
    headers = {
        "Cache-Control": f"public, max-age={SEARCH_CACHE_MAX_AGE}, s-maxage={SEARCH_CACHE_MAX_AGE}",
        "X-Processing-Time": f"{elapsed_ms}ms",
        "X-Result-Count": str(len(results)),
        "X-Filter-Applied": "true" if should_filter else "false",
    }
    return JSONResponse(content=body, headers=headers)
