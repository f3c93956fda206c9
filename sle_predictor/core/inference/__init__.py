"""
Inference Module

Risk scoring (placeholder heuristic behind a model-shaped interface)
and risk classification.

Usage:
    from sle_predictor.core.inference import HeuristicRiskScorer, classify

    scores = HeuristicRiskScorer().score(validated_record)
    tier = classify(scores.sle_probability)
"""
from .scorer import (
    BaseScorer,
    HeuristicRiskScorer,
    RiskScores,
    symptom_count,
    base_score,
    SLE_DIAGNOSIS_THRESHOLD,
    FLARE_RISK_THRESHOLD,
)
from .classifier import (
    RiskTier,
    Urgency,
    TreatmentPlan,
    RISK_TIER_INFO,
    ADDITIONAL_CLINICAL_CONSIDERATIONS,
    classify,
    overall_risk,
    recommend_treatment,
)

__all__ = [
    "BaseScorer",
    "HeuristicRiskScorer",
    "RiskScores",
    "symptom_count",
    "base_score",
    "SLE_DIAGNOSIS_THRESHOLD",
    "FLARE_RISK_THRESHOLD",
    "RiskTier",
    "Urgency",
    "TreatmentPlan",
    "RISK_TIER_INFO",
    "ADDITIONAL_CLINICAL_CONSIDERATIONS",
    "classify",
    "overall_risk",
    "recommend_treatment",
]
