"""
Fuzzy matching of an ingredient list against a user's allergens.

Both sides are normalized the same way and compared by substring containment in
both directions, so "peanut butter" matches "peanut" and a terse "milk" matches
an allergen entry such as "whole milk".
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional, Sequence

from .models import MatchResult
from .synonyms import AllergenSynonyms

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


def normalize_text(text: str) -> str:
    """Lowercase, trim, and drop everything outside [a-z0-9 whitespace]."""
    return _NON_ALNUM.sub("", (text or "").lower().strip())


def contains_either_way(left: str, right: str) -> bool:
    """Bidirectional substring containment; empty strings never match."""
    if not left or not right:
        return False
    return right in left or left in right


def _search_terms(
    allergens: Iterable[str],
    synonyms: Optional[AllergenSynonyms],
    ai_categories: Optional[Sequence[str]],
) -> List[str]:
    terms: Dict[str, None] = {}
    allergen_list = list(allergens)

    for allergen in allergen_list:
        expanded = synonyms.expand(allergen) if synonyms else [allergen]
        for term in expanded:
            terms.setdefault(normalize_text(term))

    # Categories reported by the upstream extractor only count when they
    # relate to something the user is actually allergic to.
    if ai_categories:
        user_terms = [normalize_text(a) for a in allergen_list]
        for category in ai_categories:
            normal_category = normalize_text(category)
            if not any(contains_either_way(normal_category, ua) for ua in user_terms):
                continue
            expanded = synonyms.expand(category) if synonyms else [category]
            for term in expanded:
                terms.setdefault(normalize_text(term))

    terms.pop("", None)
    return list(terms)


def match_ingredients(
    ingredients: Sequence[str],
    allergens: Sequence[str],
    synonyms: Optional[AllergenSynonyms] = None,
    ai_categories: Optional[Sequence[str]] = None,
) -> MatchResult:
    """
    Partition ``ingredients`` into those matching any allergen and the rest.

    Every ingredient lands in exactly one of ``matches``/``safe`` with its
    original text and order. Pass ``synonyms`` to expand each allergen into its
    related terms first, and ``ai_categories`` to also search the categories an
    image extractor flagged for the user's allergens.
    """
    terms = _search_terms(allergens, synonyms, ai_categories)
    result = MatchResult()
    for ingredient in ingredients:
        normal_ingredient = normalize_text(ingredient)
        if any(contains_either_way(normal_ingredient, term) for term in terms):
            result.matches.append(ingredient)
        else:
            result.safe.append(ingredient)
    return result
