# searchrank/utils/urls.py
from __future__ import annotations
from urllib.parse import urlencode, urlparse, urlunparse, parse_qsl

__all__ = ["build_search_url"]


def build_search_url(api: str, query: str) -> str:
    """
    Build a MacCMS video-list search URL on top of a source's api base.

    Existing query parameters on the base are kept; ``ac`` and ``wd`` are
    always set by us.

    >>> build_search_url("https://x.com/api.php/provide/vod", "后浪")
    'https://x.com/api.php/provide/vod?ac=videolist&wd=%E5%90%8E%E6%B5%AA'
    """
    p = urlparse((api or "").strip())
    params = [(k, v) for k, v in parse_qsl(p.query, keep_blank_values=True) if k not in ("ac", "wd")]
    params += [("ac", "videolist"), ("wd", query)]
    return urlunparse(p._replace(query=urlencode(params)))
