import pytest
from pydantic import ValidationError

from searchrank.config import (
    GroupedResponse,
    HealthResponse,
    RankRequest,
    SearchResult,
    SourceConfig,
)


def test_search_result_keeps_unknown_fields():
    res = SearchResult(title="后浪", year=2019, area="大陆", actor="某某")
    dumped = res.model_dump()
    assert dumped["area"] == "大陆"
    assert dumped["year"] == 2019
    assert res.episodes == []


def test_rank_request_requires_query():
    with pytest.raises(ValidationError):
        RankRequest(query="", results=[])
    req = RankRequest(query="x", results=[{"title": "y"}])
    assert isinstance(req.results[0], SearchResult)
    assert req.strict is False


def test_source_config_defaults():
    src = SourceConfig(key="k", name="N", api="http://k")
    assert src.disabled is False
    assert src.is_adult is False


def test_grouped_and_health_responses():
    resp = GroupedResponse(query="q", exact=[], high=[], medium=[], low=[])
    assert resp.query == "q"
    assert HealthResponse(status="healthy").status == "healthy"
