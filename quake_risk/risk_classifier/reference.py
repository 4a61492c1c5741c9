"""Labelled reference samples used by the similarity and k-NN estimators.

The table is part of the model: adding, removing or reordering rows changes
predictions (row order breaks k-NN distance ties).
"""

import numpy as np

from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.features import normalize_batch
from quake_risk.risk_classifier.types import HIGH, LOW, MEDIUM, ReferenceSample

REFERENCE_SAMPLES = (
    ReferenceSample(55.3, 4.8, 5, MEDIUM, "Sapporo"),
    ReferenceSample(60.1, 5.2, 2, HIGH, "Sendai"),
    ReferenceSample(80.4, 5.0, 1, HIGH, "Tokyo"),
    ReferenceSample(78.6, 4.9, 1, MEDIUM, "Yokohama"),
    ReferenceSample(50.7, 4.6, 3, MEDIUM, "Nagoya"),
    ReferenceSample(45.2, 4.5, 4, MEDIUM, "Osaka"),
    ReferenceSample(48.0, 4.4, 6, LOW, "Kyoto"),
    ReferenceSample(70.2, 5.3, 2, HIGH, "Kobe"),
    ReferenceSample(42.8, 4.2, 10, LOW, "Hiroshima"),
    ReferenceSample(38.7, 4.3, 12, LOW, "Fukuoka"),
    ReferenceSample(60.9, 4.7, 7, LOW, "Kagoshima"),
    ReferenceSample(45.5, 4.1, 8, LOW, "Naha"),
    ReferenceSample(65.0, 4.9, 5, MEDIUM, "Aomori"),
    ReferenceSample(63.3, 4.8, 6, MEDIUM, "Akita"),
    ReferenceSample(67.2, 5.0, 3, MEDIUM, "Niigata"),
    ReferenceSample(72.6, 5.1, 1, HIGH, "Toyama"),
    ReferenceSample(68.4, 4.6, 4, MEDIUM, "Nagano"),
    ReferenceSample(52.7, 4.7, 3, MEDIUM, "Shizuoka"),
    ReferenceSample(41.3, 4.3, 7, LOW, "Matsue"),
    ReferenceSample(60.5, 4.9, 0, HIGH, "Obihiro"),
    # Deep, strong, recent
    ReferenceSample(75.0, 5.4, 1, HIGH, "high-pattern-1"),
    ReferenceSample(82.1, 5.6, 0, HIGH, "high-pattern-2"),
    ReferenceSample(85.0, 5.5, 0, HIGH, "high-pattern-3"),
    ReferenceSample(78.0, 5.3, 1, HIGH, "high-pattern-4"),
    ReferenceSample(90.0, 5.7, 0, HIGH, "high-pattern-5"),
    # Shallow, weak, quiet for weeks
    ReferenceSample(35.0, 3.8, 15, LOW, "low-pattern-1"),
    ReferenceSample(40.5, 4.0, 14, LOW, "low-pattern-2"),
    ReferenceSample(30.0, 3.5, 20, LOW, "low-pattern-3"),
    ReferenceSample(35.5, 3.9, 18, LOW, "low-pattern-4"),
    ReferenceSample(43.2, 4.0, 15, LOW, "low-pattern-5"),
    ReferenceSample(39.8, 4.1, 16, LOW, "low-pattern-6"),
    ReferenceSample(58.3, 4.5, 5, MEDIUM, "medium-pattern-1"),
    ReferenceSample(62.7, 4.7, 4, MEDIUM, "medium-pattern-2"),
    ReferenceSample(55.0, 4.6, 6, MEDIUM, "medium-pattern-3"),
    ReferenceSample(64.0, 4.8, 5, MEDIUM, "medium-pattern-4"),
)


class ReferenceTable:
    """Read-only view of a sample sequence with its normalized feature matrix.

    Built once per (samples, normalization) pair and shared across calls.
    """

    def __init__(self, samples, cfg: ClassifierConfig = None):
        if cfg is None:
            cfg = ClassifierConfig()
        self.samples = tuple(samples)
        if not self.samples:
            raise ValueError("Reference table must contain at least one sample")

        self.features = normalize_batch(
            np.array([s.depth for s in self.samples], dtype=float),
            np.array([s.magnitude for s in self.samples], dtype=float),
            np.array([s.days_since_last for s in self.samples], dtype=float),
            cfg,
        )
        self.risks = np.array([s.risk_class for s in self.samples], dtype=float)
        self.features.setflags(write=False)
        self.risks.setflags(write=False)

    def __len__(self) -> int:
        return len(self.samples)

    def without(self, idx: int, cfg: ClassifierConfig = None) -> "ReferenceTable":
        """Copy of the table with row `idx` removed (leave-one-out evaluation)."""
        return ReferenceTable(self.samples[:idx] + self.samples[idx + 1:], cfg)


DEFAULT_TABLE = ReferenceTable(REFERENCE_SAMPLES)
