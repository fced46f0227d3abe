import httpx

from searchrank import upstream
from searchrank.config import SourceConfig
from searchrank.utils.urls import build_search_url

SOURCE = SourceConfig(key="demo", name="Demo", api="https://demo.example/api.php/provide/vod")


class DummyResponse:
    def __init__(self, payload=None, status_code=200, text=None):
        self._payload = payload
        self.status_code = status_code
        self.text = text if text is not None else "{}"
        self.content = self.text.encode("utf-8")

    def json(self):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload


def test_build_search_url():
    url = build_search_url("https://x.com/api.php/provide/vod", "后浪")
    assert url == "https://x.com/api.php/provide/vod?ac=videolist&wd=%E5%90%8E%E6%B5%AA"

    url = build_search_url("https://x.com/api?ac=list&token=1", "dune")
    assert url == "https://x.com/api?token=1&ac=videolist&wd=dune"


def test_parse_episodes_uses_last_group():
    play_url = "HD$http://a/1.mp4$$$第1集$http://b/1.m3u8#第2集$http://b/2.m3u8#"
    assert upstream.parse_episodes(play_url) == ["http://b/1.m3u8", "http://b/2.m3u8"]
    assert upstream.parse_episodes("") == []
    assert upstream.parse_episodes(None) == []


def test_to_search_result_mapping():
    item = {
        "vod_id": 42,
        "vod_name": " 后浪 ",
        "vod_pic": "http://img/1.jpg",
        "vod_year": "2019",
        "vod_douban_id": 30166972,
        "type_name": "剧情片",
        "vod_content": "<p>A <b>good</b> film</p>",
        "vod_remarks": "HD",
        "vod_play_url": "正片$http://b/1.m3u8",
    }
    res = upstream.to_search_result(item, SOURCE)
    assert res.id == "42"
    assert res.title == "后浪"
    assert res.year == "2019"
    assert res.douban_id == 30166972
    assert res.source == "demo"
    assert res.source_name == "Demo"
    assert res.desc == "A good film"
    assert res.episodes == ["http://b/1.m3u8"]


def test_search_source_maps_list(monkeypatch):
    seen = {}

    def fake_get(self, url, headers=None):
        seen["url"] = url
        return DummyResponse(
            {"list": [{"vod_id": 1, "vod_name": "后浪"}, {"vod_id": 2, "vod_name": ""}, "junk"]}
        )

    monkeypatch.setattr(upstream.httpx.Client, "get", fake_get)
    results = upstream.search_source(SOURCE, "后浪")

    assert "ac=videolist" in seen["url"]
    assert [r.title for r in results] == ["后浪"]


def test_search_source_degrades_to_empty(monkeypatch):
    monkeypatch.setattr(
        upstream.httpx.Client, "get", lambda self, url, headers=None: DummyResponse({}, status_code=502)
    )
    assert upstream.search_source(SOURCE, "x") == []

    monkeypatch.setattr(
        upstream.httpx.Client, "get", lambda self, url, headers=None: DummyResponse(None, text="<html>")
    )
    assert upstream.search_source(SOURCE, "x") == []

    def timeout(self, url, headers=None):
        raise httpx.ConnectTimeout("timed out")

    monkeypatch.setattr(upstream.httpx.Client, "get", timeout)
    assert upstream.search_source(SOURCE, "x") == []


def test_search_source_rejects_oversized_body(monkeypatch):
    monkeypatch.setattr(upstream, "HTTP_MAX_BYTES", 10)
    monkeypatch.setattr(
        upstream.httpx.Client,
        "get",
        lambda self, url, headers=None: DummyResponse({"list": []}, text="x" * 100),
    )
    assert upstream.search_source(SOURCE, "x") == []
