"""
Central risk engine: finds which profile allergens are present in an ordered
ingredient list, scores each one, and rolls them up into a single meal/scan
result.

Key stages:
- resolve the caller's profile into full entries (bare names default to
  moderate severity and sensitivity)
- detect each entry in the normalized ingredients via its related terms
- derive an exposure level from ingredient position and frequency
- score severity x exposure x sensitivity per matched allergen
- keep the worst single score; unrelated exposures do not add up
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

from .exposure import classify_exposure
from .matcher import normalize_text
from .models import (
    AllergenProfileEntry,
    ProfileItem,
    RiskCalculationResult,
    RiskFactors,
    RiskResult,
    RiskTier,
    SeverityLabel,
    build_profile,
)
from .risk_tiers import risk_tier, severity_label
from .scoring import aggregate_results, score_factors
from .synonyms import DEFAULT_SYNONYMS, AllergenSynonyms

log = logging.getLogger(__name__)

NO_MATCH_SCORE = 5
NO_MATCH_EXPLANATION = "No known allergens detected in the provided ingredients."


def no_match_result() -> RiskResult:
    return RiskResult(
        risk_score=NO_MATCH_SCORE,
        matched_allergens=[],
        severity=SeverityLabel.LOW,
        risk_tier=RiskTier.LOW,
        explanation=NO_MATCH_EXPLANATION,
    )


class RiskEngine:
    """
    Stateless scorer for one ingredient list against one allergen profile.
    Inject a different synonym table to adapt detection to your catalogue.
    """

    def __init__(self, synonyms: Optional[AllergenSynonyms] = None):
        self.synonyms = synonyms or DEFAULT_SYNONYMS

    def is_present(self, allergen: str, normalized_ingredients: Sequence[str]) -> bool:
        """True when any normalized ingredient contains a related term."""
        terms = [normalize_text(term) for term in self.synonyms.expand(allergen)]
        terms = [term for term in terms if term]
        return any(
            term in ingredient for ingredient in normalized_ingredients for term in terms
        )

    def score_entry(
        self, entry: AllergenProfileEntry, ingredients: Sequence[str]
    ) -> RiskCalculationResult:
        exposure = classify_exposure(entry.allergen, ingredients, self.synonyms)
        factors = RiskFactors(
            severity=entry.severity,
            exposure=exposure,
            sensitivity=entry.sensitivity,
        )
        return score_factors(factors)

    def assess(
        self, ingredients: Sequence[str], profile: Iterable[AllergenProfileEntry]
    ) -> RiskResult:
        """
        Score every profile entry found in ``ingredients`` and return the
        aggregated result, or the fixed no-match result when nothing matched.
        """
        normalized_ingredients = [normalize_text(i) for i in ingredients]
        per_allergen: Dict[str, RiskCalculationResult] = {}
        matched: List[str] = []
        scored: List[RiskCalculationResult] = []

        for entry in profile:
            if not self.is_present(entry.allergen, normalized_ingredients):
                continue
            if entry.allergen not in per_allergen:
                matched.append(entry.allergen)

            detail = self.score_entry(entry, ingredients)
            log.debug(
                "allergen=%s raw=%d score=%d tier=%s",
                entry.allergen,
                detail.raw_score,
                detail.normalized_score,
                detail.risk_tier.value,
            )
            previous = per_allergen.get(entry.allergen)
            if previous is None or detail.normalized_score > previous.normalized_score:
                per_allergen[entry.allergen] = detail
            scored.append(detail)

        worst = aggregate_results(scored)
        if worst is None:
            return no_match_result()

        return RiskResult(
            risk_score=worst.normalized_score,
            matched_allergens=matched,
            severity=severity_label(worst.normalized_score),
            risk_tier=risk_tier(worst.normalized_score),
            explanation=worst.explanation,
            per_allergen=per_allergen,
        )


def compute_risk_score(
    ingredients: Sequence[str],
    profile: Iterable[ProfileItem],
    synonyms: Optional[AllergenSynonyms] = None,
) -> RiskResult:
    """
    Convenience entrypoint accepting bare allergen names, entries, or mappings.
    """
    entries = build_profile(profile)
    return RiskEngine(synonyms=synonyms).assess(ingredients, entries)
