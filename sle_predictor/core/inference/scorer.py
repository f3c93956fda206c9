"""
Risk Scorer

Maps a validated record to two probabilities: SLE diagnosis and 12-month
flare.  `HeuristicRiskScorer` is a placeholder for a trained model; any
replacement only has to implement `BaseScorer.score` and keep both
probabilities in [0, 1].

Heuristic:
    symptoms   = count of Fatigue, Malar_Rash, Arthritis, Renal_Disorder, Fever == 1
    base       = 0.10
               + 0.15 × symptoms
               + 0.30 if ANA_Positive == 1
               + 0.20 if Creatinine > 1.5 mg/dL
               + 0.10 if Age > 40
    P(SLE)     = clamp(base + U[-0.1, 0.1))
    P(flare)   = clamp(0.7 × base + U[0, 0.3) + U[-0.1, 0.1))
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import numpy as np

from sle_predictor.core.schema import SYMPTOM_FIELDS
from sle_predictor.utils import get_logger

logger = get_logger(__name__)

# ── Thresholds ────────────────────────────────────────────────────────────────

SLE_DIAGNOSIS_THRESHOLD = 0.5   # sle_diagnosis = 1 iff P(SLE) > 0.5
FLARE_RISK_THRESHOLD    = 0.4   # flare_12m = 1 iff P(flare) > 0.4

# ── Heuristic weights ─────────────────────────────────────────────────────────

BASE_INTERCEPT        = 0.10
SYMPTOM_WEIGHT        = 0.15
ANA_WEIGHT            = 0.30
CREATININE_WEIGHT     = 0.20
CREATININE_CUTOFF     = 1.5     # mg/dL
AGE_WEIGHT            = 0.10
AGE_CUTOFF            = 40      # years
FLARE_SCALE           = 0.7

PERTURBATION_RANGE    = (-0.1, 0.1)
FLARE_NOISE_RANGE     = (0.0, 0.3)


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return min(max(value, low), high)


@dataclass(frozen=True)
class RiskScores:
    """Output of a scorer: two probabilities plus their binary calls."""
    sle_probability: float
    flare_probability: float

    def __post_init__(self):
        for name in ("sle_probability", "flare_probability"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must lie in [0, 1], got {value}")

    @property
    def sle_diagnosis(self) -> int:
        return 1 if self.sle_probability > SLE_DIAGNOSIS_THRESHOLD else 0

    @property
    def flare_12m(self) -> int:
        return 1 if self.flare_probability > FLARE_RISK_THRESHOLD else 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sle_diagnosis": self.sle_diagnosis,
            "sle_probability": round(self.sle_probability, 4),
            "flare_12m": self.flare_12m,
            "flare_probability": round(self.flare_probability, 4),
        }


# ── Feature aggregation ───────────────────────────────────────────────────────

def symptom_count(record: Mapping[str, Any]) -> int:
    """Number of the five tracked symptoms recorded as present (== 1)."""
    return sum(1 for name in SYMPTOM_FIELDS if record.get(name) == 1)


def base_score(record: Mapping[str, Any]) -> float:
    """Noise-free heuristic score; may exceed 1.0 before clamping."""
    score = BASE_INTERCEPT + SYMPTOM_WEIGHT * symptom_count(record)
    if record.get("ANA_Positive") == 1:
        score += ANA_WEIGHT
    if record.get("Creatinine", 0.0) > CREATININE_CUTOFF:
        score += CREATININE_WEIGHT
    if record.get("Age", 0.0) > AGE_CUTOFF:
        score += AGE_WEIGHT
    return score


# ── Scorers ───────────────────────────────────────────────────────────────────

class BaseScorer(ABC):
    """Validated record in, two probabilities out."""

    name = "base"

    @abstractmethod
    def score(self, record: Mapping[str, Any]) -> RiskScores:
        """Score an already validated record. Must not be called on raw input."""


class HeuristicRiskScorer(BaseScorer):
    """
    Deterministic heuristic with optional demo variability.

    Args:
        rng:   numpy Generator supplying the random terms. A fresh,
               unseeded generator is created when omitted.
        noise: When False every random term is zero and the scorer is
               fully deterministic.
    """

    name = "heuristic"

    def __init__(self, rng: Optional[np.random.Generator] = None, noise: bool = True):
        self._rng = rng if rng is not None else np.random.default_rng()
        self.noise = noise

    def _uniform(self, low: float, high: float) -> float:
        if not self.noise:
            return 0.0
        return float(self._rng.uniform(low, high))

    def score(self, record: Mapping[str, Any]) -> RiskScores:
        base = base_score(record)

        sle_p = clamp(base + self._uniform(*PERTURBATION_RANGE))
        flare_p = clamp(
            FLARE_SCALE * base
            + self._uniform(*FLARE_NOISE_RANGE)
            + self._uniform(*PERTURBATION_RANGE)
        )

        logger.debug(
            f"HeuristicRiskScorer: symptoms={symptom_count(record)} base={base:.3f} "
            f"→ P(SLE)={sle_p:.3f}, P(flare)={flare_p:.3f}"
        )
        return RiskScores(sle_probability=sle_p, flare_probability=flare_p)
