"""
Allergy risk package: scores an ordered ingredient list against a user's
allergen profile.

Expose the main classes so consumers can import directly from the package.
"""

from .models import (
    AlertSeverity,
    AllergenProfileEntry,
    AllergyRiskError,
    Exposure,
    InvalidProfileError,
    InvalidRiskFactorError,
    MatchResult,
    RiskCalculationResult,
    RiskFactors,
    RiskResult,
    RiskTier,
    Sensitivity,
    Severity,
    SeverityLabel,
    build_profile,
)
from .exposure import classify_exposure
from .ingredient_source import IngredientSource, OpenFoodFactsIngredientSource
from .matcher import match_ingredients, normalize_text
from .risk_engine import RiskEngine, compute_risk_score
from .risk_tiers import alert_severity, risk_tier, severity_label, should_alert
from .scoring import aggregate_results, score_factors
from .synonyms import DEFAULT_SYNONYMS, AllergenSynonyms

__all__ = [
    "AlertSeverity",
    "AllergenProfileEntry",
    "AllergenSynonyms",
    "AllergyRiskError",
    "DEFAULT_SYNONYMS",
    "Exposure",
    "IngredientSource",
    "InvalidProfileError",
    "InvalidRiskFactorError",
    "MatchResult",
    "OpenFoodFactsIngredientSource",
    "RiskCalculationResult",
    "RiskEngine",
    "RiskFactors",
    "RiskResult",
    "RiskTier",
    "Sensitivity",
    "Severity",
    "SeverityLabel",
    "aggregate_results",
    "alert_severity",
    "build_profile",
    "classify_exposure",
    "compute_risk_score",
    "match_ingredients",
    "normalize_text",
    "risk_tier",
    "score_factors",
    "severity_label",
    "should_alert",
]
