from dataclasses import dataclass, field
from typing import Optional

RISK_LABELS = ("low", "medium", "high")
LOW, MEDIUM, HIGH = 0, 1, 2


@dataclass(frozen=True)
class ReferenceSample:
    depth: float            # km
    magnitude: float
    days_since_last: int
    risk_class: int         # 0=low, 1=medium, 2=high
    name: str = ""


@dataclass
class Query:
    """Raw measurements for one prediction.

    latitude/longitude are carried for context and logging only; the
    classification never reads them.
    """
    latitude: float
    longitude: float
    depth: float
    magnitude: float
    days_since_last_eq: int


@dataclass
class RiskAssessment:
    """Numeric outcome of the classification stages for one feature vector."""
    risk_class: int
    confidence: float       # 0.0–max_confidence
    accuracy: float
    weighted_avg_risk: float
    knn_risk: float
    combined_risk: float
    total_similarity: float
    override: Optional[str] = None      # name of the override rule that fired
    features: tuple = ()

    @property
    def label(self) -> str:
        return RISK_LABELS[self.risk_class]


@dataclass
class PredictionResult:
    risk: str               # "low" | "medium" | "high"
    confidence: int         # percent, 0–98
    accuracy: int           # percent
    details: str
    processing_time_ms: int
    assessment: Optional[RiskAssessment] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "risk": self.risk,
            "confidence": self.confidence,
            "accuracy": self.accuracy,
            "details": self.details,
            "processing_time_ms": self.processing_time_ms,
        }
