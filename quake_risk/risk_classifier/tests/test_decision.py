import numpy as np
import pytest
from quake_risk.risk_classifier.config import ClassifierConfig
from quake_risk.risk_classifier.decision import (
    OVERRIDE_RULES,
    apply_overrides,
    assess,
    confidence_score,
    threshold_class,
)
from quake_risk.risk_classifier.features import normalize
from quake_risk.risk_classifier.reference import DEFAULT_TABLE, REFERENCE_SAMPLES, ReferenceTable
from quake_risk.risk_classifier.types import HIGH, LOW, MEDIUM, ReferenceSample


CFG = ClassifierConfig()


def _assess(depth, magnitude, days, table=None):
    return assess(normalize(depth, magnitude, days, CFG), CFG, table)


class TestThresholdClass:
    @pytest.mark.parametrize("combined, expected", [
        (2.0, HIGH), (1.6, HIGH), (1.59, MEDIUM), (0.7, MEDIUM), (0.69, LOW), (0.0, LOW),
    ])
    def test_cut_points(self, combined, expected):
        assert threshold_class(combined, CFG) == expected


class TestOverrideRules:
    def test_rule_order(self):
        assert [rule[0] for rule in OVERRIDE_RULES] == [
            "strong_recent", "deep_strong_recent", "weak_quiet",
        ]

    def test_strong_recent_raises_to_high(self):
        assert apply_overrides(LOW, (0.1, 0.8, 0.9)) == (HIGH, "strong_recent")

    def test_deep_strong_recent_raises_to_high(self):
        assert apply_overrides(MEDIUM, (0.7, 0.6, 0.8)) == (HIGH, "deep_strong_recent")

    def test_first_match_wins_on_overlap(self):
        # Matches both high rules; the first one is reported
        assert apply_overrides(LOW, (0.9, 0.9, 0.95)) == (HIGH, "strong_recent")

    def test_weak_quiet_caps_at_low(self):
        assert apply_overrides(HIGH, (0.5, 0.2, 0.3)) == (LOW, "weak_quiet")

    def test_no_rule_leaves_class(self):
        assert apply_overrides(MEDIUM, (0.5, 0.5, 0.5)) == (MEDIUM, None)

    def test_deep_rule_needs_depth(self):
        assert apply_overrides(MEDIUM, (0.69, 0.6, 0.8)) == (MEDIUM, None)


class TestConfidenceScore:
    def test_capped(self):
        risks = np.zeros(10)
        order = np.arange(10)
        assert confidence_score(order, risks, 0, 10.0, CFG) == pytest.approx(0.98)

    def test_disagreeing_neighbours_lower_confidence(self):
        risks = np.array([2.0, 2.0, 2.0, 2.0, 2.0, 0.0])
        order = np.arange(6)
        # variance 4 -> adjustment 0; base = 0.85 + 0.5 * 0.1
        assert confidence_score(order, risks, 0, 3.0, CFG) == pytest.approx(0.90)

    def test_partial_agreement(self):
        risks = np.array([1.0, 1.0, 1.0, 1.0, 2.0])
        order = np.arange(5)
        # variance 0.2 -> adjustment 0.108; base 0.85 + 0.2 * 0.1
        assert confidence_score(order, risks, 1, 1.0, CFG) == pytest.approx(0.978)


class TestAssessFixtures:
    def test_tokyo_is_high(self):
        a = _assess(80.4, 6.2, 1)
        assert a.label == "high"
        assert a.override == "deep_strong_recent"

    def test_hiroshima_is_low(self):
        a = _assess(42.8, 4.2, 10)
        assert a.label == "low"
        assert a.knn_risk == pytest.approx(0.0)
        assert a.confidence == pytest.approx(0.98)

    def test_strong_recent_quake_forced_high(self):
        a = _assess(10.0, 7.0, 0)
        assert a.label == "high"
        assert a.override == "strong_recent"

    def test_blend_weights(self):
        a = _assess(55.3, 4.8, 5)
        assert a.combined_risk == pytest.approx(0.3 * a.weighted_avg_risk + 0.7 * a.knn_risk)

    def test_accuracy_is_model_constant(self):
        assert _assess(42.8, 4.2, 10).accuracy == _assess(80.4, 6.2, 1).accuracy == 0.95

    def test_confidence_bounds(self):
        rng = np.random.default_rng(7)
        for depth, mag, days in zip(rng.uniform(0, 120, 50), rng.uniform(2, 9, 50),
                                    rng.integers(0, 40, 50)):
            a = _assess(depth, mag, days)
            assert 0.0 <= a.confidence <= 0.98
            assert a.risk_class in (LOW, MEDIUM, HIGH)

    def test_magnitude_monotonic(self):
        classes = [_assess(60.0, mag, 2).risk_class for mag in (3.0, 4.0, 5.0, 6.0, 7.0, 8.0)]
        assert classes == sorted(classes)
        assert classes[0] == LOW
        assert classes[-1] == HIGH


class TestSmallReferenceTable:
    def test_fewer_than_k_samples(self):
        table = ReferenceTable([
            ReferenceSample(80.0, 6.0, 0, HIGH),
            ReferenceSample(50.0, 4.5, 5, MEDIUM),
            ReferenceSample(30.0, 3.5, 20, LOW),
        ], CFG)
        a = _assess(50.0, 4.5, 5, table)
        assert a.knn_risk == pytest.approx(1.0)
        assert a.label in ("low", "medium", "high")

    def test_single_sample(self):
        table = ReferenceTable([ReferenceSample(50.0, 4.5, 5, MEDIUM)], CFG)
        a = _assess(50.0, 4.5, 5, table)
        assert a.label == "medium"
        assert a.total_similarity == pytest.approx(1.0)

    def test_empty_table_rejected(self):
        with pytest.raises(ValueError):
            ReferenceTable([], CFG)


class TestReferenceTable:
    def test_default_size(self):
        assert len(DEFAULT_TABLE) == len(REFERENCE_SAMPLES) == 35

    def test_read_only(self):
        with pytest.raises(ValueError):
            DEFAULT_TABLE.features[0, 0] = 0.5

    def test_samples_immutable(self):
        with pytest.raises(AttributeError):
            REFERENCE_SAMPLES[0].risk_class = 2

    def test_without_drops_row(self):
        smaller = DEFAULT_TABLE.without(0)
        assert len(smaller) == 34
        assert smaller.samples[0] == REFERENCE_SAMPLES[1]
