"""
Three-factor weighted risk model.

Each factor maps to a weight in {1, 2, 3}; their product is the raw score
(1-27), normalized to a 0-100 scale and bucketed into a risk tier.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional

from .models import (
    Exposure,
    RiskCalculationResult,
    RiskFactors,
    Severity,
    Sensitivity,
)
from .risk_tiers import risk_tier

MAX_RAW_SCORE = 27

SEVERITY_WEIGHTS: Dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MODERATE: 2,
    Severity.HIGH: 3,
}
EXPOSURE_WEIGHTS: Dict[Exposure, int] = {
    Exposure.TRACE: 1,
    Exposure.LOW: 2,
    Exposure.HIGH: 3,
}
SENSITIVITY_WEIGHTS: Dict[Sensitivity, int] = {
    Sensitivity.MILD: 1,
    Sensitivity.MODERATE: 2,
    Sensitivity.SEVERE: 3,
}

EXPLANATION_TEMPLATE = (
    "Risk calculated from: {severity} allergen severity ({severity_weight}), "
    "{exposure} exposure level ({exposure_weight}), "
    "{sensitivity} user sensitivity ({sensitivity_weight}). "
    "Raw score: {raw}/{max_raw}."
)


def normalize_raw_score(raw_score: int) -> int:
    """Scale a raw score to 0-100, rounding halves up."""
    return int(math.floor(raw_score * 100 / MAX_RAW_SCORE + 0.5))


def score_factors(factors: RiskFactors) -> RiskCalculationResult:
    severity_weight = SEVERITY_WEIGHTS[factors.severity]
    exposure_weight = EXPOSURE_WEIGHTS[factors.exposure]
    sensitivity_weight = SENSITIVITY_WEIGHTS[factors.sensitivity]

    raw = severity_weight * exposure_weight * sensitivity_weight
    normalized = normalize_raw_score(raw)

    explanation = EXPLANATION_TEMPLATE.format(
        severity=factors.severity.value,
        severity_weight=severity_weight,
        exposure=factors.exposure.value,
        exposure_weight=exposure_weight,
        sensitivity=factors.sensitivity.value,
        sensitivity_weight=sensitivity_weight,
        raw=raw,
        max_raw=MAX_RAW_SCORE,
    )
    return RiskCalculationResult(
        raw_score=raw,
        normalized_score=normalized,
        risk_tier=risk_tier(normalized),
        explanation=explanation,
    )


def aggregate_results(
    results: Iterable[RiskCalculationResult],
) -> Optional[RiskCalculationResult]:
    """
    Pick the controlling result: the highest normalized score, first seen on
    ties. Scores are never summed or averaged.
    """
    worst: Optional[RiskCalculationResult] = None
    for result in results:
        if worst is None or result.normalized_score > worst.normalized_score:
            worst = result
    return worst
