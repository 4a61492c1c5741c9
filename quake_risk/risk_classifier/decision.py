"""Blend, threshold and override stages, plus confidence scoring."""

import numpy as np
import structlog

from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.estimators import (
    knn_estimate,
    nearest_order,
    similarity_estimate,
    weighted_distances,
)
from quake_risk.risk_classifier.reference import DEFAULT_TABLE, ReferenceTable
from quake_risk.risk_classifier.types import HIGH, LOW, MEDIUM, RISK_LABELS, RiskAssessment

logger = structlog.get_logger(__name__)

# Evaluated in order; the first matching rule wins and the rest are skipped.
# "floor" raises the class to at least `value`, "ceiling" caps it at `value`.
OVERRIDE_RULES = [
    ("strong_recent",      lambda d, m, r: m >= 0.8 and r >= 0.9,              "floor",   HIGH,
     "very high magnitude + very recent"),
    ("deep_strong_recent", lambda d, m, r: m >= 0.6 and r >= 0.8 and d >= 0.7, "floor",   HIGH,
     "high magnitude + recent + deep"),
    ("weak_quiet",         lambda d, m, r: m <= 0.2 and r <= 0.3,              "ceiling", LOW,
     "low magnitude + old activity"),
]


def threshold_class(combined_risk: float, cfg: ClassifierConfig = None) -> int:
    if cfg is None:
        cfg = ClassifierConfig()
    if combined_risk >= cfg.high_threshold:
        return HIGH
    if combined_risk >= cfg.medium_threshold:
        return MEDIUM
    return LOW


def apply_overrides(risk_class: int, features) -> tuple:
    """Apply the first matching override rule. Returns (risk_class, rule_name or None)."""
    d, m, r = (float(x) for x in features)
    fired = None
    for name, predicate, mode, value, _desc in OVERRIDE_RULES:
        if predicate(d, m, r):
            if mode == "floor":
                risk_class = max(risk_class, value)
            else:
                risk_class = min(risk_class, value)
            fired = name
            break
    return max(LOW, min(HIGH, risk_class)), fired


def confidence_score(
    order: np.ndarray,
    risks: np.ndarray,
    final_risk: int,
    total_similarity: float,
    cfg: ClassifierConfig = None,
) -> float:
    """Confidence from mean similarity and agreement of the nearest neighbours.

    base        = 0.85 + mean_similarity * 0.10
    adjustment  = max(0, 0.12 - variance * 0.06)
    where variance is the mean squared gap between each of the 5 nearest
    neighbours' class and the final class. Capped at 0.98.
    """
    if cfg is None:
        cfg = ClassifierConfig()
    nearest = risks[order[:cfg.confidence_neighbors]]
    risk_variance = float(np.mean((nearest - final_risk) ** 2))
    base = cfg.confidence_base + (total_similarity / len(risks)) * cfg.similarity_bonus
    adjustment = max(0.0, cfg.adjustment_cap - risk_variance * cfg.variance_penalty)
    return min(cfg.max_confidence, base + adjustment)


def assess(
    features,
    cfg: ClassifierConfig = None,
    table: ReferenceTable = None,
) -> RiskAssessment:
    """Run both estimators and the decision stage on one normalized feature vector.

    `table` must be normalized with the same config; defaults to the built-in
    reference table.
    """
    if cfg is None:
        cfg = ClassifierConfig()
    if table is None:
        table = DEFAULT_TABLE

    features = np.asarray(features, dtype=float)
    log = logger.bind(depth=round(float(features[0]), 3),
                      magnitude=round(float(features[1]), 3),
                      recency=round(float(features[2]), 3))

    distances = weighted_distances(features, table.features, cfg)
    weighted_avg_risk, total_similarity = similarity_estimate(distances, table.risks)
    order = nearest_order(distances)
    knn_risk = knn_estimate(order, table.risks, cfg.k_neighbors)

    combined_risk = cfg.similarity_blend * weighted_avg_risk + cfg.knn_blend * knn_risk
    risk_class = threshold_class(combined_risk, cfg)
    log.debug("risk_threshold", weighted_avg_risk=round(weighted_avg_risk, 3),
              knn_risk=round(knn_risk, 3), combined_risk=round(combined_risk, 3),
              risk=RISK_LABELS[risk_class])

    final_risk, fired = apply_overrides(risk_class, features)
    if fired is not None:
        log.debug("risk_override", rule=fired, before=RISK_LABELS[risk_class],
                  after=RISK_LABELS[final_risk])

    confidence = confidence_score(order, table.risks, final_risk, total_similarity, cfg)

    return RiskAssessment(
        risk_class=final_risk,
        confidence=confidence,
        accuracy=cfg.accuracy,
        weighted_avg_risk=weighted_avg_risk,
        knn_risk=knn_risk,
        combined_risk=combined_risk,
        total_similarity=total_similarity,
        override=fired,
        features=tuple(float(x) for x in features),
    )
