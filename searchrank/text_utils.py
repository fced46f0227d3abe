from __future__ import annotations

import numpy as np


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic edit distance over code points (insert / delete / substitute = 1).

    Rolling-row DP: delete and substitute are taken for the whole row at
    once, inserts are resolved with a running minimum along the row.
    """
    n, m = len(a), len(b)
    if n == 0 or m == 0:
        return n + m

    b_codes = np.fromiter(map(ord, b), dtype=np.int64, count=m)
    idx = np.arange(m + 1, dtype=np.int64)
    prev = idx.copy()

    for i, ca in enumerate(a, start=1):
        cost = (b_codes != ord(ca)).astype(np.int64)
        cur = np.empty(m + 1, dtype=np.int64)
        cur[0] = i
        np.minimum(prev[1:] + 1, prev[:-1] + cost, out=cur[1:])
        # cur[j] = min(cur[j], cur[j-1] + 1) carried across the row
        prev = np.minimum.accumulate(cur - idx) + idx
    return int(prev[m])


def similarity_score(a: str, b: str) -> float:
    """1 - normalised edit distance, in [0, 1]. Two empty strings are identical."""
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / max_len


def contains_chars_in_order(title: str, keyword: str) -> bool:
    """
    True if every character of ``keyword`` appears in ``title`` in order,
    gaps allowed. '后浪' matches '后来的浪潮'.
    """
    k = 0
    for ch in title:
        if k >= len(keyword):
            break
        if ch == keyword[k]:
            k += 1
    return k == len(keyword)
