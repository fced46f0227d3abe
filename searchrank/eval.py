# searchrank/eval.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

import pandas as pd
from loguru import logger

from . import config
from .grouping import relevance_tier
from .normalize import clean_query
from .rerank import score_candidates
from .scoring import current_year, match_rule

OUTPUT_COLUMNS = ["query", "rank", "title", "year", "score", "rule", "tier"]

# ---------- IO helpers ----------

def _read_any(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    ext = path.suffix.lower()
    if ext == ".json":
        df = pd.read_json(path, dtype=False)
    else:
        df = pd.read_csv(path, encoding="utf-8", dtype=str, keep_default_na=False)
    cols = {c.lower().strip(): c for c in df.columns}
    qcol, tcol = cols.get("query"), cols.get("title")
    if not qcol or not tcol:
        raise ValueError(
            f"Expected columns 'query' and 'title'. Found: {list(df.columns)}"
        )
    renames = {qcol: "query", tcol: "title"}
    for opt in ("year", "douban_id"):
        if opt in cols:
            renames[cols[opt]] = opt
    df = df.rename(columns=renames)
    for opt in ("year", "douban_id"):
        if opt not in df.columns:
            df[opt] = None
    return df

# ---------- scoring ----------

def rank_frame(df: pd.DataFrame, now_year: Optional[int] = None) -> pd.DataFrame:
    """
    Rank every query group of a (query, title[, year, douban_id]) frame.
    Returns one row per candidate with its rank, score, rule and tier.
    """
    if now_year is None:
        now_year = current_year()

    rows = []
    df = df.copy()
    df["query"] = df["query"].map(clean_query)
    for query, frame in df.groupby("query", sort=True):
        if not query:
            continue
        # missing cells (NaN from JSON nulls or absent keys) go in as None
        cells = frame[["title", "year", "douban_id"]].astype(object)
        records = cells.where(cells.notna(), None).to_dict(orient="records")
        for rec in records:
            rec["title"] = rec["title"] or ""
        for pos, sc in enumerate(score_candidates(records, query, now_year), start=1):
            rows.append({
                "query": query,
                "rank": pos,
                "title": sc.result.get("title") or "",
                "year": sc.year or "",
                "score": round(sc.score, 4),
                "rule": match_rule(sc.result.get("title"), query) or "",
                "tier": relevance_tier(sc.score),
            })
    return pd.DataFrame(rows, columns=OUTPUT_COLUMNS)


def tier_summary(ranked: pd.DataFrame) -> pd.DataFrame:
    """Per-query count of results in each tier (exact/high/medium/low)."""
    if ranked.empty:
        return pd.DataFrame(columns=["query"] + config.TIER_NAMES)
    counts = (
        ranked.groupby(["query", "tier"]).size()
        .unstack(fill_value=0)
        .reindex(columns=config.TIER_NAMES, fill_value=0)
        .reset_index()
    )
    counts.columns.name = None
    return counts

# ---------- CLI ----------

def main():
    ap = argparse.ArgumentParser(description="Score and rank a CSV/JSON of search results offline.")
    ap.add_argument("--input", type=Path, required=True,
                    help="CSV/JSON with columns query,title[,year,douban_id]")
    ap.add_argument("--output", type=Path, default=None,
                    help="Where to write the ranked CSV (default: print only)")
    ap.add_argument("--current-year", type=int, default=None,
                    help="Fix the recency clock (default: today)")
    args = ap.parse_args()

    df = _read_any(args.input)
    logger.info("Loaded {} rows from {}", len(df), args.input)

    ranked = rank_frame(df, now_year=args.current_year)

    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        ranked.to_csv(args.output, index=False, encoding="utf-8")
        logger.info("Wrote {} ranked rows to {}", len(ranked), args.output)

    summary = tier_summary(ranked)
    print(summary.to_string(index=False))

if __name__ == "__main__":
    main()
