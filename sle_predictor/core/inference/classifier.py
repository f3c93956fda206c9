"""
Risk Classifier

Maps probabilities to risk tiers and the overall risk to a treatment
protocol.

Tier thresholds (inclusive lower edges):
    p ≥ 0.7  → High
    p ≥ 0.4  → Moderate
    else     → Low

Treatment protocol uses max(P(SLE), P(flare)) against the same thresholds.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

HIGH_RISK_THRESHOLD     = 0.7
MODERATE_RISK_THRESHOLD = 0.4


class RiskTier(str, Enum):
    LOW      = "Low"
    MODERATE = "Moderate"
    HIGH     = "High"


class Urgency(str, Enum):
    LOW    = "Low"
    MEDIUM = "Medium"
    HIGH   = "High"


@dataclass(frozen=True)
class RiskTierInfo:
    label: str
    description: str


RISK_TIER_INFO: Dict[RiskTier, RiskTierInfo] = {
    RiskTier.LOW: RiskTierInfo(
        "Low Risk", "Low probability based on current clinical indicators"),
    RiskTier.MODERATE: RiskTierInfo(
        "Moderate Risk", "Moderate probability requiring monitoring"),
    RiskTier.HIGH: RiskTierInfo(
        "High Risk", "High probability requiring immediate attention"),
}


@dataclass(frozen=True)
class TreatmentPlan:
    """Treatment protocol selected for a patient's overall risk."""
    level: str
    urgency: Urgency
    steps: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "urgency": self.urgency.value,
            "steps": list(self.steps),
        }


_TREATMENT_PLANS: Dict[RiskTier, TreatmentPlan] = {
    RiskTier.HIGH: TreatmentPlan(
        level="High Risk - Immediate Intervention Required",
        urgency=Urgency.HIGH,
        steps=(
            "Corticosteroids (Prednisone 10-40mg daily)",
            "Immunosuppressive therapy (Methotrexate/Azathioprine)",
            "Antimalarial drugs (Hydroxychloroquine 200-400mg daily)",
            "Regular specialist monitoring (monthly visits)",
            "Lifestyle modifications and stress management",
        ),
    ),
    RiskTier.MODERATE: TreatmentPlan(
        level="Moderate Risk - Active Monitoring Protocol",
        urgency=Urgency.MEDIUM,
        steps=(
            "Antimalarial drugs (Hydroxychloroquine 200mg daily)",
            "Low-dose corticosteroids if symptoms worsen",
            "NSAIDs for joint symptoms (as needed)",
            "Regular monitoring (bi-monthly specialist visits)",
            "Lifestyle counseling and sun protection measures",
        ),
    ),
    RiskTier.LOW: TreatmentPlan(
        level="Low Risk - Preventive Care Approach",
        urgency=Urgency.LOW,
        steps=(
            "Regular health checkups (quarterly visits)",
            "Lifestyle modifications and regular exercise",
            "Sun protection and stress management techniques",
            "Monitoring for early symptom development",
            "Patient education and support group referrals",
        ),
    ),
}

ADDITIONAL_CLINICAL_CONSIDERATIONS: Tuple[str, ...] = (
    "Correlation with clinical findings and additional laboratory tests is essential",
    "Consider rheumatologist consultation for definitive diagnosis confirmation",
    "Monitor for drug interactions and adverse effects during treatment",
    "Regular assessment of disease activity using validated scoring systems",
    "Coordinate care with other specialists as needed (nephrology, cardiology)",
)


def classify(probability: float) -> RiskTier:
    """Map a probability to its risk tier."""
    if probability >= HIGH_RISK_THRESHOLD:
        return RiskTier.HIGH
    if probability >= MODERATE_RISK_THRESHOLD:
        return RiskTier.MODERATE
    return RiskTier.LOW


def overall_risk(sle_probability: float, flare_probability: float) -> float:
    return max(sle_probability, flare_probability)


def recommend_treatment(sle_probability: float, flare_probability: float) -> TreatmentPlan:
    """Select the treatment protocol for the higher of the two probabilities."""
    return _TREATMENT_PLANS[classify(overall_risk(sle_probability, flare_probability))]
