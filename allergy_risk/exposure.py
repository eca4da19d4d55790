"""
Exposure level estimation from ingredient-list position and frequency.

Labels list ingredients by descending proportion, so an allergen that shows up
early or more than once is likely present in a larger amount than one that
appears only near the end.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .matcher import contains_either_way
from .models import Exposure
from .synonyms import DEFAULT_SYNONYMS, AllergenSynonyms

# Entries at index <= HIGH_EXPOSURE_MAX_INDEX count as a high exposure.
HIGH_EXPOSURE_MAX_INDEX = 2


def matching_positions(
    allergen: str, ingredients: Sequence[str], synonyms: AllergenSynonyms
) -> List[int]:
    """Indices of ingredients that contain, or are contained by, any related term."""
    terms = [term.lower() for term in synonyms.expand(allergen)]
    positions: List[int] = []
    for index, ingredient in enumerate(ingredients):
        normalized = (ingredient or "").lower().strip()
        if any(contains_either_way(normalized, term) for term in terms):
            positions.append(index)
    return positions


def classify_exposure(
    allergen: str,
    ingredients: Sequence[str],
    synonyms: Optional[AllergenSynonyms] = None,
) -> Exposure:
    positions = matching_positions(allergen, ingredients, synonyms or DEFAULT_SYNONYMS)
    if not positions:
        return Exposure.TRACE

    first = positions[0]
    if len(positions) > 1 or first <= HIGH_EXPOSURE_MAX_INDEX:
        return Exposure.HIGH
    if first <= len(ingredients) / 2:
        return Exposure.LOW
    return Exposure.TRACE
