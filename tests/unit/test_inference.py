"""
Unit Tests for Risk Scoring and Classification
"""
import numpy as np
import pytest

from sle_predictor.core.inference import (
    HeuristicRiskScorer, RiskScores, RiskTier, Urgency,
    base_score, symptom_count, classify, recommend_treatment,
)
from sle_predictor.core.validation import validate


class TestFeatureAggregation:
    """symptom_count / base_score."""

    def test_symptom_count(self, valid_record):
        assert symptom_count(validate(valid_record)) == 3

    def test_base_score_minimum(self, low_risk_record):
        assert base_score(validate(low_risk_record)) == pytest.approx(0.1)

    def test_base_score_all_factors(self, extreme_record):
        assert base_score(validate(extreme_record)) == pytest.approx(1.45)

    def test_cutoffs_are_strict(self, low_risk_record):
        low_risk_record.update({"Creatinine": 1.5, "Age": 40})
        assert base_score(validate(low_risk_record)) == pytest.approx(0.1)

        low_risk_record.update({"Creatinine": 1.51, "Age": 41})
        assert base_score(validate(low_risk_record)) == pytest.approx(0.4)


class TestHeuristicRiskScorer:
    """Probability ranges and determinism."""

    def test_noise_free_low_risk(self, low_risk_record):
        scores = HeuristicRiskScorer(noise=False).score(validate(low_risk_record))
        assert scores.sle_probability == pytest.approx(0.1)
        assert scores.flare_probability == pytest.approx(0.07)
        assert scores.sle_diagnosis == 0
        assert scores.flare_12m == 0
        assert classify(scores.sle_probability) == RiskTier.LOW
        plan = recommend_treatment(scores.sle_probability, scores.flare_probability)
        assert plan.urgency == Urgency.LOW

    def test_clamped_at_extremes(self, extreme_record):
        record = validate(extreme_record)
        scorer = HeuristicRiskScorer(rng=np.random.default_rng(0))
        for _ in range(200):
            scores = scorer.score(record)
            assert 0.0 <= scores.sle_probability <= 1.0
            assert 0.0 <= scores.flare_probability <= 1.0
            assert scores.sle_probability == 1.0

    def test_probabilities_in_range_for_random_records(self, low_risk_record):
        rng = np.random.default_rng(7)
        scorer = HeuristicRiskScorer(rng=np.random.default_rng(8))
        for _ in range(100):
            record = dict(low_risk_record)
            for name in ("Fatigue", "Malar_Rash", "Arthritis", "Renal_Disorder", "Fever", "ANA_Positive"):
                record[name] = int(rng.integers(0, 2))
            record["Creatinine"] = float(rng.uniform(0, 5))
            record["Age"] = float(rng.uniform(0, 120))
            scores = scorer.score(validate(record))
            assert 0.0 <= scores.sle_probability <= 1.0
            assert 0.0 <= scores.flare_probability <= 1.0

    def test_noise_bounds(self, low_risk_record):
        record = validate(low_risk_record)
        scorer = HeuristicRiskScorer(rng=np.random.default_rng(1))
        for _ in range(200):
            scores = scorer.score(record)
            assert 0.0 <= scores.sle_probability <= 0.2
            # 0.07 + [0, 0.3) + [-0.1, 0.1)
            assert 0.0 <= scores.flare_probability <= 0.47

    def test_seeded_reproducible(self, valid_record):
        record = validate(valid_record)
        a = HeuristicRiskScorer(rng=np.random.default_rng(42)).score(record)
        b = HeuristicRiskScorer(rng=np.random.default_rng(42)).score(record)
        assert a == b


class TestBinaryCalls:
    """Diagnosis / flare flags at and around their thresholds."""

    @pytest.mark.parametrize("p, expected", [(0.5, 0), (0.5000001, 1), (0.4999999, 0), (1.0, 1)])
    def test_sle_diagnosis_threshold(self, p, expected):
        assert RiskScores(sle_probability=p, flare_probability=0.0).sle_diagnosis == expected

    @pytest.mark.parametrize("p, expected", [(0.4, 0), (0.4000001, 1), (0.3999999, 0), (0.0, 0)])
    def test_flare_threshold(self, p, expected):
        assert RiskScores(sle_probability=0.0, flare_probability=p).flare_12m == expected

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            RiskScores(sle_probability=1.2, flare_probability=0.1)


class TestClassify:
    """Tier thresholds."""

    @pytest.mark.parametrize("p, tier", [
        (0.0, RiskTier.LOW),
        (0.3999, RiskTier.LOW),
        (0.4, RiskTier.MODERATE),
        (0.6999, RiskTier.MODERATE),
        (0.7, RiskTier.HIGH),
        (1.0, RiskTier.HIGH),
    ])
    def test_boundaries(self, p, tier):
        assert classify(p) == tier

    def test_monotonic(self):
        order = [RiskTier.LOW, RiskTier.MODERATE, RiskTier.HIGH]
        ranks = [order.index(classify(p)) for p in np.linspace(0, 1, 1001)]
        assert ranks == sorted(ranks)


class TestRecommendTreatment:
    """Protocol selection on the higher probability."""

    def test_high(self):
        plan = recommend_treatment(0.2, 0.75)
        assert plan.urgency == Urgency.HIGH
        assert plan.level.startswith("High Risk")
        assert any("Corticosteroids" in s for s in plan.steps)
        assert any("monthly" in s for s in plan.steps)

    def test_moderate(self):
        plan = recommend_treatment(0.4, 0.1)
        assert plan.urgency == Urgency.MEDIUM
        assert any("NSAIDs" in s for s in plan.steps)
        assert any("bi-monthly" in s for s in plan.steps)

    def test_low(self):
        plan = recommend_treatment(0.39, 0.39)
        assert plan.urgency == Urgency.LOW
        assert any("quarterly" in s for s in plan.steps)

    def test_to_dict(self):
        data = recommend_treatment(0.9, 0.9).to_dict()
        assert data["urgency"] == "High"
        assert len(data["steps"]) == 5
