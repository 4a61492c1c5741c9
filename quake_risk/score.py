#!/usr/bin/env python3
"""Batch-score a table of locations for earthquake risk.

Input columns: latitude, longitude, depth, magnitude, days_since_last_eq.
Rows that fail validation are reported and left unscored.

Usage:
  python -m quake_risk.score queries.csv
  python -m quake_risk.score queries.parquet --output scored.csv
"""

import argparse
import asyncio
import sys

import pandas as pd

from quake_risk.data_io import QUERY_COLUMNS, load_data, save_data
from quake_risk.logging_setup import configure_logging
from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.engine import predict_risk
from quake_risk.validation import QueryValidationError, validate_query


async def _predict_all(queries, cfg):
    """Run all predictions concurrently; the simulated delays overlap."""
    return await asyncio.gather(*(predict_risk(q, cfg) for q in queries))


def score_frame(df: pd.DataFrame, cfg: ClassifierConfig = None) -> pd.DataFrame:
    """Return a copy of `df` with risk, confidence, accuracy and error columns."""
    if cfg is None:
        cfg = ClassifierConfig()
    missing = [c for c in QUERY_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing input columns: {missing}")

    n = len(df)
    risks, confidences, accuracies = [None] * n, [pd.NA] * n, [pd.NA] * n
    errors = [""] * n

    valid_pos, queries = [], []
    for pos, (_, row) in enumerate(df.iterrows()):
        try:
            queries.append(validate_query(*(row[c] for c in QUERY_COLUMNS)))
            valid_pos.append(pos)
        except QueryValidationError as e:
            errors[pos] = str(e)

    results = asyncio.run(_predict_all(queries, cfg)) if queries else []
    for pos, result in zip(valid_pos, results):
        risks[pos] = result.risk
        confidences[pos] = result.confidence
        accuracies[pos] = result.accuracy

    # Lists assign by position, so repeated index labels are safe
    out = df.copy()
    out["risk"] = risks
    out["confidence"] = confidences
    out["accuracy"] = accuracies
    out["error"] = errors
    return out


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Batch-score earthquake risk for a CSV/Parquet table of locations.",
    )
    parser.add_argument("input", help="CSV or Parquet file with query columns")
    parser.add_argument("--output", help="Write scored rows to this CSV/Parquet file")
    parser.add_argument("--no-delay", action="store_true",
                        help="Skip the simulated processing latency")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)

    df = load_data(args.input)
    if df is None:
        print(f"ERROR: Input not found: {args.input}")
        sys.exit(1)

    cfg = ClassifierConfig()
    if args.no_delay:
        cfg.min_delay_ms = cfg.max_delay_ms = 0.0

    try:
        scored = score_frame(df, cfg)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.output:
        save_data(scored, args.output)
        print(f"Written {len(scored)} rows to {args.output}")
    else:
        print(f"\n{'Lat':>9} {'Lng':>10} {'Depth':>7} {'Mag':>5} {'Days':>5}  {'Risk':<7} {'Conf':>5}  Error")
        print("-" * 80)
        for _, row in scored.iterrows():
            risk = row["risk"] or "-"
            conf = "-" if pd.isna(row["confidence"]) else f"{int(row['confidence'])}%"
            print(f"{row['latitude']:>9} {row['longitude']:>10} {row['depth']:>7} "
                  f"{row['magnitude']:>5} {row['days_since_last_eq']:>5}  {risk:<7} {conf:>5}  {row['error']}")

    counts = scored["risk"].value_counts()
    print(f"\n{int(counts.sum())} of {len(scored)} rows scored: "
          + ", ".join(f"{counts.get(label, 0)} {label}" for label in ("low", "medium", "high")))


if __name__ == "__main__":
    main()
