from searchrank.text_utils import (
    contains_chars_in_order,
    levenshtein_distance,
    similarity_score,
)
from searchrank.normalize import clean_query, clean_title, parse_year, strip_html, strip_spaces


def test_levenshtein_basic():
    assert levenshtein_distance("kitten", "sitting") == 3
    assert levenshtein_distance("", "abc") == 3
    assert levenshtein_distance("abc", "") == 3
    assert levenshtein_distance("abc", "abc") == 0
    # no transposition shortcut
    assert levenshtein_distance("ab", "ba") == 2


def _reference_distance(a, b):
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        cur = [i]
        for j, cb in enumerate(b, start=1):
            cur.append(min(prev[j] + 1, cur[j - 1] + 1, prev[j - 1] + (ca != cb)))
        prev = cur
    return prev[-1]


def test_levenshtein_matches_table_reference():
    pairs = [
        ("kitten", "sitting"),
        ("flaw", "lawn"),
        ("intention", "execution"),
        ("aaaa", "a"),
        ("a", "aaaa"),
        ("abcabc", "cbacba"),
        ("斗罗大陆", "斗罗 大陆 第二季"),
        ("后来的浪潮", "前浪纪事"),
        ("x", "y"),
    ]
    for a, b in pairs:
        assert levenshtein_distance(a, b) == _reference_distance(a, b), (a, b)


def test_levenshtein_over_cjk_code_points():
    assert levenshtein_distance("后来的浪潮", "后浪") == 3


def test_similarity_score_bounds():
    assert similarity_score("", "") == 1.0
    assert similarity_score("abc", "abc") == 1.0
    assert similarity_score("abc", "xyz") == 0.0
    assert abs(similarity_score("后来的浪潮", "后浪") - 0.4) < 1e-9


def test_contains_chars_in_order():
    assert contains_chars_in_order("后来的浪潮", "后浪")
    assert not contains_chars_in_order("浪来的后潮", "后浪")
    assert contains_chars_in_order("abc", "")
    assert not contains_chars_in_order("", "a")


def test_strip_spaces_and_parse_year():
    assert strip_spaces(" 斗罗 \t大陆\n") == "斗罗大陆"
    assert parse_year("2019") == 2019
    assert parse_year(" 2019-07-01") == 2019
    assert parse_year("TBA") == 0
    assert parse_year(None) == 0
    assert parse_year(float("nan")) == 0


def test_strip_html():
    assert strip_html("<p>Hello <b>world</b>!</p>") == "Hello world !"
    assert strip_html(None) == ""


def test_clean_query_collapses_whitespace():
    assert clean_query("  斗罗\t 大陆\n第二季 ") == "斗罗 大陆 第二季"
    assert clean_query(None) == ""
    assert clean_query(float("nan")) == ""
    assert clean_query(2019) == "2019"


def test_clean_query_caps_long_queries():
    assert clean_query("a" * 500) == "a" * 120
    assert clean_query("abc def", max_len=4) == "abc"


def test_clean_title_treats_nan_as_missing():
    assert clean_title(float("nan")) == ""
    assert clean_title("  后浪 ") == "后浪"
