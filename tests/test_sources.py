import json

import pytest

from searchrank.sources import SourceConfigError, find_source, load_sources


def _write(tmp_path, payload):
    path = tmp_path / "sources.json"
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


def test_load_sources_accepts_list_and_wrapped_forms(tmp_path):
    entry = {"key": "a", "name": "A", "api": "http://a/api"}
    assert [s.key for s in load_sources(_write(tmp_path, [entry]))] == ["a"]

    sources = load_sources(_write(tmp_path, {"sources": [entry, {**entry, "key": "b", "disabled": True}]}))
    assert [s.key for s in sources] == ["a", "b"]
    assert sources[1].disabled is True
    assert find_source(sources, "b") is sources[1]
    assert find_source(sources, "zzz") is None


def test_missing_file_means_no_sources(tmp_path):
    assert load_sources(tmp_path / "nope.json") == []


def test_invalid_sources_raise(tmp_path):
    with pytest.raises(SourceConfigError):
        load_sources(_write(tmp_path, [{"key": "a", "name": "A"}]))

    with pytest.raises(SourceConfigError):
        entry = {"key": "a", "name": "A", "api": "http://a"}
        load_sources(_write(tmp_path, [entry, entry]))

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SourceConfigError):
        load_sources(bad)
