"""Earthquake risk classifier: similarity-weighted estimate blended with k-NN voting."""

from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.decision import assess
from quake_risk.risk_classifier.engine import predict_risk, predict_risk_sync
from quake_risk.risk_classifier.features import normalize
from quake_risk.risk_classifier.reference import REFERENCE_SAMPLES, ReferenceTable
from quake_risk.risk_classifier.types import PredictionResult, Query, ReferenceSample, RiskAssessment

__all__ = [
    "Query",
    "ReferenceSample",
    "RiskAssessment",
    "PredictionResult",
    "ClassifierConfig",
    "REFERENCE_SAMPLES",
    "ReferenceTable",
    "normalize",
    "assess",
    "predict_risk",
    "predict_risk_sync",
]
