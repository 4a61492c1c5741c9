"""Feature normalization: raw seismic measurements to a [0, 1] feature vector.

Out-of-range inputs are clamped, never rejected. Range checks belong to the
caller (see quake_risk.validation).
"""

import numpy as np

from quake_risk.risk_classifier.config import ClassifierConfig

FEATURE_NAMES = ("depth", "magnitude", "recency")


def normalize_batch(
    depth: np.ndarray,
    magnitude: np.ndarray,
    days_since_last: np.ndarray,
    cfg: ClassifierConfig = None,
) -> np.ndarray:
    """Normalize arrays of raw measurements. Returns an (n, 3) matrix.

    Columns are:
      depth     depth / 100 km
      magnitude (magnitude - 3) / 5
      recency   (30 - days) / 30, so recent activity scores higher
    """
    if cfg is None:
        cfg = ClassifierConfig()

    d = np.asarray(depth, dtype=float) / cfg.depth_scale_km
    m = (np.asarray(magnitude, dtype=float) - cfg.magnitude_floor) / cfg.magnitude_span
    r = (cfg.recency_window_days - np.asarray(days_since_last, dtype=float)) / cfg.recency_window_days
    return np.clip(np.column_stack([d, m, r]), 0.0, 1.0)


def normalize(depth: float, magnitude: float, days_since_last: float,
              cfg: ClassifierConfig = None) -> np.ndarray:
    """Normalize a single measurement triple to [depth, magnitude, recency]."""
    return normalize_batch([depth], [magnitude], [days_since_last], cfg)[0]
