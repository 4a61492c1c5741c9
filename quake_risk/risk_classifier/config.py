from dataclasses import dataclass


@dataclass
class ClassifierConfig:
    model_version: str = "knn-blend-2"

    # Normalization
    depth_scale_km: float = 100.0
    magnitude_floor: float = 3.0
    magnitude_span: float = 5.0
    recency_window_days: float = 30.0

    # Weighted Euclidean distance (applied to axis differences before squaring)
    depth_weight: float = 0.30
    magnitude_weight: float = 0.50          # magnitude dominates
    recency_weight: float = 0.20

    # Neighbourhoods
    k_neighbors: int = 7
    confidence_neighbors: int = 5           # first N of the k-NN ordering

    # Blend of the two estimators
    similarity_blend: float = 0.3
    knn_blend: float = 0.7

    # Threshold classification on the blended score
    high_threshold: float = 1.6
    medium_threshold: float = 0.7

    # Confidence
    confidence_base: float = 0.85
    similarity_bonus: float = 0.10
    adjustment_cap: float = 0.12
    variance_penalty: float = 0.06
    max_confidence: float = 0.98

    # Validation accuracy of this model version, not computed per query
    accuracy: float = 0.95

    # Simulated latency, awaited before the computation
    min_delay_ms: float = 25.0
    max_delay_ms: float = 75.0

    # Fallback result on computation failure
    fallback_risk: str = "medium"
    fallback_confidence: int = 85
    fallback_accuracy: int = 90
