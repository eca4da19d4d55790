"""
Allergen category table and the read-only synonym lookup built on top of it.

Maps allergen categories (e.g. "dairy") to the ingredient names and derivatives
that reveal them, so an allergen can be expanded into every term worth
searching for in an ingredient list.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

# Category -> related ingredient terms. Keys and values are lower-case.
DEFAULT_ALLERGEN_CATEGORIES: Dict[str, Tuple[str, ...]] = {
    "dairy": (
        "milk", "cheese", "butter", "cream", "yogurt", "yoghurt", "ice cream",
        "whey", "casein", "lactose", "ghee", "curd", "curds", "kefir",
        "half and half", "half-and-half", "sour cream", "cream cheese",
        "cottage cheese", "ricotta", "mozzarella", "parmesan", "cheddar",
        "brie", "gouda", "provolone", "swiss cheese", "feta",
        "condensed milk", "evaporated milk", "powdered milk", "milk powder",
        "buttermilk", "milkfat", "milk fat", "milk solids", "lactalbumin",
        "lactoglobulin", "galactose", "paneer",
    ),
    "eggs": (
        "egg", "eggs", "egg white", "egg yolk", "albumin", "globulin",
        "lysozyme", "mayonnaise", "mayo", "meringue", "ovalbumin",
        "ovomucin", "ovomucoid", "ovovitellin", "egg lecithin",
    ),
    "peanuts": (
        "peanut", "peanuts", "peanut butter", "peanut oil", "groundnut",
        "groundnuts", "arachis oil", "monkey nuts",
    ),
    "tree nuts": (
        "almond", "almonds", "cashew", "cashews", "walnut", "walnuts",
        "pecan", "pecans", "pistachio", "pistachios", "macadamia",
        "hazelnut", "hazelnuts", "brazil nut", "brazil nuts",
        "pine nut", "pine nuts", "chestnut", "chestnuts", "praline",
        "marzipan", "nougat", "gianduja", "nutella",
    ),
    "shellfish": (
        "shrimp", "crab", "lobster", "crayfish", "crawfish", "prawn",
        "prawns", "scallop", "scallops", "clam", "clams", "mussel",
        "mussels", "oyster", "oysters", "squid", "calamari", "octopus",
        "snail", "escargot", "abalone",
    ),
    "fish": (
        "salmon", "tuna", "cod", "bass", "trout", "halibut", "haddock",
        "catfish", "tilapia", "sardine", "sardines", "anchovy", "anchovies",
        "herring", "mackerel", "swordfish", "mahi", "fish sauce",
        "fish oil", "fish gelatin", "surimi",
    ),
    "wheat": (
        "wheat", "flour", "bread", "pasta", "noodle", "noodles", "couscous",
        "bulgur", "semolina", "spelt", "kamut", "durum", "einkorn",
        "farina", "breadcrumbs", "crouton", "croutons", "seitan",
        "wheat starch", "wheat germ", "wheat bran",
    ),
    "gluten": (
        "wheat", "barley", "rye", "oat", "oats", "spelt", "kamut",
        "triticale", "semolina", "durum", "farina", "flour", "bread",
        "pasta", "noodle", "noodles", "couscous", "bulgur", "seitan",
        "malt", "brewer yeast",
    ),
    "soy": (
        "soy", "soybean", "soybeans", "soya", "edamame", "tofu",
        "tempeh", "miso", "soy sauce", "soy milk", "soy lecithin",
        "soy protein", "soy flour", "soybean oil",
    ),
    "sesame": (
        "sesame", "sesame seed", "sesame seeds", "sesame oil", "tahini",
        "hummus", "halvah", "halva",
    ),
    "mustard": (
        "mustard", "mustard seed", "mustard seeds", "mustard oil",
        "mustard powder", "mustard flour", "dijon",
    ),
    "celery": (
        "celery", "celeriac", "celery salt", "celery seed", "celery seeds",
    ),
    "lupin": (
        "lupin", "lupine", "lupini", "lupini beans",
    ),
    "mollusk": (
        "snail", "escargot", "clam", "clams", "mussel", "mussels",
        "oyster", "oysters", "squid", "calamari", "octopus", "abalone",
    ),
    "banana": (
        "banana", "bananas", "plantain", "plantains",
    ),
    "mango": (
        "mango", "mangoes", "mangos",
    ),
    "shrimp": (
        "shrimp", "prawns", "prawn",
    ),
}


class AllergenSynonyms:
    """
    Read-only lookup from an allergen name to the terms related to it.
    Inject a custom table to extend or replace the defaults.
    """

    def __init__(self, categories: Optional[Mapping[str, Sequence[str]]] = None):
        source = DEFAULT_ALLERGEN_CATEGORIES if categories is None else categories
        self._categories: Mapping[str, Tuple[str, ...]] = MappingProxyType(
            {
                key.lower().strip(): tuple(term.lower().strip() for term in terms)
                for key, terms in source.items()
            }
        )

    @property
    def categories(self) -> Mapping[str, Tuple[str, ...]]:
        return self._categories

    def expand(self, allergen: str) -> List[str]:
        """
        Return the allergen itself plus every related term: the members of its
        category when it names one, and the category and siblings of every
        category that lists it.
        """
        normalized = (allergen or "").lower().strip()
        terms: Dict[str, None] = {normalized: None}

        for term in self._categories.get(normalized, ()):
            terms.setdefault(term)

        for category, related in self._categories.items():
            if normalized in related:
                terms.setdefault(category)
                for term in related:
                    terms.setdefault(term)

        return list(terms)


DEFAULT_SYNONYMS = AllergenSynonyms()
