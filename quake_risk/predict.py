#!/usr/bin/env python3
"""Predict earthquake risk for a single location.

Usage:
  python -m quake_risk.predict --sample tokyo
  python -m quake_risk.predict --lat 35.68 --lng 139.69 --depth 80.4 --magnitude 6.2 --days 1
"""

import argparse
import json
import sys

from quake_risk.logging_setup import configure_logging
from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.engine import predict_risk_sync
from quake_risk.validation import SAMPLE_LOCATIONS, QueryValidationError, validate_query


def print_result(result, query):
    print(f"\n  Location:   ({query.latitude:.4f}, {query.longitude:.4f})")
    print(f"  Input:      depth={query.depth} km, magnitude={query.magnitude}, "
          f"days since last={query.days_since_last_eq}")
    print(f"  {'-'*50}")
    print(f"  Risk:       {result.risk.upper()}")
    print(f"  Confidence: {result.confidence}%")
    print(f"  Accuracy:   {result.accuracy}%")
    print(f"  Time:       {result.processing_time_ms} ms")
    print(f"\n  {result.details}\n")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Classify earthquake risk (low/medium/high) from seismic measurements.",
    )
    parser.add_argument("--sample", choices=sorted(SAMPLE_LOCATIONS),
                        help="Use a preset sample location instead of explicit values")
    parser.add_argument("--lat", help="Latitude in degrees")
    parser.add_argument("--lng", help="Longitude in degrees")
    parser.add_argument("--depth", help="Depth in km")
    parser.add_argument("--magnitude", help="Average past magnitude")
    parser.add_argument("--days", help="Days since last earthquake")
    parser.add_argument("--no-delay", action="store_true",
                        help="Skip the simulated processing latency")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--log-level", default="WARNING",
                        help="Log level for diagnostics on stderr (default: WARNING)")
    args = parser.parse_args(argv)

    configure_logging(log_level=args.log_level)

    if args.sample:
        query = SAMPLE_LOCATIONS[args.sample]
    else:
        try:
            query = validate_query(args.lat, args.lng, args.depth, args.magnitude, args.days)
        except QueryValidationError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(2)

    cfg = ClassifierConfig()
    if args.no_delay:
        cfg.min_delay_ms = cfg.max_delay_ms = 0.0

    result = predict_risk_sync(query, cfg)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print_result(result, query)


if __name__ == "__main__":
    main()
