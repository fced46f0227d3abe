from __future__ import annotations

from typing import Any, Dict, List

import httpx
from loguru import logger

from .config import (
    HTTP_CONNECT_TIMEOUT,
    HTTP_READ_TIMEOUT,
    HTTP_MAX_REDIRECTS,
    HTTP_MAX_BYTES,
    HTTP_USER_AGENT,
    SearchResult,
    SourceConfig,
)
from .normalize import strip_html
from .utils.urls import build_search_url


def parse_episodes(play_url: str | None) -> List[str]:
    """
    Extract episode URLs from a MacCMS ``vod_play_url`` field.

    Play groups are separated by '$$$', episodes by '#', and each episode
    is 'label$url'.  The last non-empty group is used.
    """
    if not play_url:
        return []
    groups = [g for g in str(play_url).split("$$$") if g.strip()]
    if not groups:
        return []
    episodes: List[str] = []
    for ep in groups[-1].split("#"):
        ep = ep.strip()
        if not ep:
            continue
        url = ep.split("$")[-1].strip()
        if url:
            episodes.append(url)
    return episodes


def to_search_result(item: Dict[str, Any], source: SourceConfig) -> SearchResult:
    """Map one MacCMS ``list[]`` entry onto our SearchResult schema."""
    douban_id = item.get("vod_douban_id")
    return SearchResult(
        id=str(item.get("vod_id", "") or ""),
        title=str(item.get("vod_name", "") or "").strip(),
        year=str(item.get("vod_year", "") or "") or None,
        douban_id=douban_id if douban_id not in ("", None) else None,
        poster=str(item.get("vod_pic", "") or ""),
        source=source.key,
        source_name=source.name,
        type_name=str(item.get("type_name", "") or ""),
        desc=strip_html(item.get("vod_content")),
        remarks=str(item.get("vod_remarks", "") or ""),
        episodes=parse_episodes(item.get("vod_play_url")),
    )


def search_source(source: SourceConfig, query: str) -> List[SearchResult]:
    """
    Query one upstream source and return its raw (unranked) results.

    Hardening:
      - httpx with connect/read timeouts and a redirect cap
      - response size cap
      - any HTTP / decode failure -> [] with a warning
    """
    url = build_search_url(source.api, query)
    headers = {"User-Agent": HTTP_USER_AGENT, "Accept": "application/json"}
    try:
        with httpx.Client(
            follow_redirects=True,
            timeout=httpx.Timeout(HTTP_READ_TIMEOUT, connect=HTTP_CONNECT_TIMEOUT),
            max_redirects=HTTP_MAX_REDIRECTS,
        ) as client:
            r = client.get(url, headers=headers)
            if r.status_code >= 400:
                logger.warning("Upstream search: HTTP {} from source {}", r.status_code, source.key)
                return []

            if len(r.content) > HTTP_MAX_BYTES:
                logger.warning(
                    "Upstream search aborted: {} bytes > {} limit (source {})",
                    len(r.content), HTTP_MAX_BYTES, source.key,
                )
                return []

            payload = r.json()
    except httpx.TimeoutException:
        logger.warning("Upstream search timeout for source {}", source.key)
        return []
    except httpx.HTTPError as e:
        logger.warning("Upstream search failed for source {}: {}", source.key, e)
        return []
    except ValueError as e:
        logger.warning("Upstream search returned invalid JSON (source {}): {}", source.key, e)
        return []

    items = payload.get("list") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        logger.warning("Upstream search: no 'list' in response from source {}", source.key)
        return []

    results: List[SearchResult] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        res = to_search_result(item, source)
        if res.title:
            results.append(res)
    return results
