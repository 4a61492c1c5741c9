"""Prediction entry point: simulated latency, timing, labelling and fallback."""

import asyncio
import random
import time

import structlog

from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.decision import assess
from quake_risk.risk_classifier.features import normalize
from quake_risk.risk_classifier.reference import ReferenceTable
from quake_risk.risk_classifier.types import PredictionResult, Query, RiskAssessment

logger = structlog.get_logger(__name__)

METHOD_NAME = "weighted similarity + k-NN blend"
FALLBACK_DETAILS = "Risk model temporarily unavailable, using fallback prediction."


def _elapsed_ms(start: float) -> int:
    return max(0, round((time.perf_counter() - start) * 1000))


def build_details(assessment: RiskAssessment, cfg: ClassifierConfig = None) -> str:
    """Human-readable summary of the feature contributions. Independent of timing."""
    if cfg is None:
        cfg = ClassifierConfig()
    d, m, r = assessment.features
    return (
        f"Seismic risk analysis ({METHOD_NAME}, k={cfg.k_neighbors}). "
        f"Depth impact ({d * 100:.1f}%), "
        f"Magnitude factor ({m * 100:.1f}%), "
        f"Temporal pattern ({r * 100:.1f}%). "
        "Similarity matching over the reference table is blended with nearest-neighbour voting."
    )


async def _simulate_latency(cfg: ClassifierConfig) -> None:
    if cfg.max_delay_ms <= 0:
        return
    delay_ms = random.uniform(max(0.0, cfg.min_delay_ms), cfg.max_delay_ms)
    await asyncio.sleep(delay_ms / 1000.0)


async def predict_risk(
    query: Query,
    cfg: ClassifierConfig = None,
    table: ReferenceTable = None,
) -> PredictionResult:
    """Classify one query. Never raises.

    Any failure inside the computation yields the fallback result (medium,
    85% confidence, 90% accuracy) timed up to the failure.
    """
    if cfg is None:
        cfg = ClassifierConfig()
    start = time.perf_counter()
    log = logger.bind(latitude=getattr(query, "latitude", None),
                      longitude=getattr(query, "longitude", None))

    try:
        await _simulate_latency(cfg)

        features = normalize(query.depth, query.magnitude, query.days_since_last_eq, cfg)
        assessment = assess(features, cfg, table)

        confidence = round(assessment.confidence * 100)
        accuracy = round(assessment.accuracy * 100)
        processing_time_ms = _elapsed_ms(start)
        result = PredictionResult(
            risk=assessment.label,
            confidence=confidence,
            accuracy=accuracy,
            details=build_details(assessment, cfg),
            processing_time_ms=processing_time_ms,
            assessment=assessment,
        )
    except Exception:
        processing_time_ms = _elapsed_ms(start)
        log.exception("risk_prediction_failed", processing_time_ms=processing_time_ms)
        return PredictionResult(
            risk=cfg.fallback_risk,
            confidence=cfg.fallback_confidence,
            accuracy=cfg.fallback_accuracy,
            details=FALLBACK_DETAILS,
            processing_time_ms=processing_time_ms,
        )

    log.info("risk_prediction", risk=result.risk, confidence=result.confidence,
             accuracy=result.accuracy, override=assessment.override,
             model_version=cfg.model_version, processing_time_ms=processing_time_ms)
    return result


def predict_risk_sync(
    query: Query,
    cfg: ClassifierConfig = None,
    table: ReferenceTable = None,
) -> PredictionResult:
    """Blocking wrapper around predict_risk for callers without an event loop."""
    return asyncio.run(predict_risk(query, cfg, table))
