"""Caller-side input checks and the preset sample locations.

The classifier itself clamps rather than rejects; these checks run before it.
"""

import math

from quake_risk.risk_classifier.types import Query

# (min, max) latitude / longitude accepted as "within Japan"
JAPAN_LAT_RANGE = (24.0, 46.0)
JAPAN_LNG_RANGE = (129.0, 146.0)

SAMPLE_LOCATIONS = {
    "tokyo": Query(latitude=35.6895, longitude=139.6917, depth=80.4, magnitude=6.2,
                   days_since_last_eq=1),
    "sapporo": Query(latitude=43.0618, longitude=141.3545, depth=55.3, magnitude=4.8,
                     days_since_last_eq=5),
    "hiroshima": Query(latitude=34.3853, longitude=132.4553, depth=42.8, magnitude=4.2,
                       days_since_last_eq=10),
}


class QueryValidationError(ValueError):
    """Raised when raw input cannot be turned into a query."""


def _to_float(name, value) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError):
        raise QueryValidationError(f"{name} must be numeric, got {value!r}") from None
    if math.isnan(out) or math.isinf(out):
        raise QueryValidationError(f"{name} must be a finite number, got {value!r}")
    return out


def in_japan(latitude: float, longitude: float) -> bool:
    return (JAPAN_LAT_RANGE[0] <= latitude <= JAPAN_LAT_RANGE[1]
            and JAPAN_LNG_RANGE[0] <= longitude <= JAPAN_LNG_RANGE[1])


def validate_query(latitude, longitude, depth, magnitude, days_since_last_eq) -> Query:
    """Parse raw (possibly string) values into a Query.

    Raises QueryValidationError for non-numeric values, fractional day counts
    ("10.0" is accepted, "1.9" is not) or coordinates outside Japan's bounding
    box. Depth, magnitude and day ranges are not checked.
    """
    lat = _to_float("latitude", latitude)
    lng = _to_float("longitude", longitude)
    depth = _to_float("depth", depth)
    magnitude = _to_float("magnitude", magnitude)
    days = _to_float("days_since_last_eq", days_since_last_eq)
    if not days.is_integer():
        raise QueryValidationError(
            f"days_since_last_eq must be a whole number of days, got {days_since_last_eq!r}")
    days = int(days)

    if not in_japan(lat, lng):
        raise QueryValidationError(
            f"Coordinates ({lat}, {lng}) are outside Japan "
            f"(lat {JAPAN_LAT_RANGE[0]}–{JAPAN_LAT_RANGE[1]}, "
            f"lng {JAPAN_LNG_RANGE[0]}–{JAPAN_LNG_RANGE[1]})"
        )
    return Query(latitude=lat, longitude=lng, depth=depth, magnitude=magnitude,
                 days_since_last_eq=days)
