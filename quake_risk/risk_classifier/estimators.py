"""Similarity-weighted and k-nearest-neighbour risk estimators."""

import numpy as np

from quake_risk.risk_classifier.config import ClassifierConfig


def weighted_distances(query: np.ndarray, features: np.ndarray,
                       cfg: ClassifierConfig = None) -> np.ndarray:
    """Weighted Euclidean distance from `query` (3,) to every row of `features` (n, 3).

    Each axis difference is scaled by its weight before squaring.
    """
    if cfg is None:
        cfg = ClassifierConfig()
    weights = np.array([cfg.depth_weight, cfg.magnitude_weight, cfg.recency_weight])
    scaled = (np.asarray(query, dtype=float) - features) * weights
    return np.sqrt(np.sum(scaled ** 2, axis=1))


def similarity_estimate(distances: np.ndarray, risks: np.ndarray) -> tuple:
    """Return (weighted_avg_risk, total_similarity).

    similarity = 1 / (1 + distance), which lies in (0, 1] for any distance >= 0,
    so the denominator is positive for a non-empty table.
    """
    similarity = 1.0 / (1.0 + distances)
    total_similarity = float(np.sum(similarity))
    weighted_avg_risk = float(np.sum(similarity * risks) / total_similarity)
    return weighted_avg_risk, total_similarity


def nearest_order(distances: np.ndarray) -> np.ndarray:
    """Indices sorted by ascending distance; ties keep table order."""
    return np.argsort(distances, kind="stable")


def knn_estimate(order: np.ndarray, risks: np.ndarray, k: int = 7) -> float:
    """Mean risk of the k nearest samples (all samples if the table is smaller)."""
    nearest = order[:k]
    return float(np.mean(risks[nearest]))
