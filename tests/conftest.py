"""
Test fixtures shared across the allergy risk tests.
"""

import pytest

from allergy_risk import DEFAULT_SYNONYMS, AllergenSynonyms, RiskEngine


@pytest.fixture
def synonyms():
    return DEFAULT_SYNONYMS


@pytest.fixture
def engine():
    return RiskEngine()


@pytest.fixture
def label_ingredients():
    """A short label where ingredient order matters."""
    return ["wheat", "sugar", "salt", "vanilla", "milk"]


@pytest.fixture
def peanut_meal():
    return ["bread", "peanut butter", "banana"]


@pytest.fixture
def nightshade_synonyms():
    return AllergenSynonyms({"Nightshades": ["Tomato", "potato", "eggplant"]})
