"""
Ingredient list providers for the risk engine.
Fetches product JSON from OpenFoodFacts and turns it into the ordered list of
ingredient strings the engine scores.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

import requests

_SPLIT = re.compile(r"[,;]")
_PREFIX = re.compile(r"^\s*ingredients?\s*:\s*", re.IGNORECASE)


class IngredientSource:
    """
    Base interface for anything that can supply an ingredient list (API, cache).
    """

    def get_ingredients(self, ean: str) -> Optional[List[str]]:
        raise NotImplementedError


def split_ingredients_text(text: str) -> List[str]:
    """Split a label's free-text ingredient statement into ordered entries."""
    body = _PREFIX.sub("", text or "").strip().rstrip(".")
    return [part.strip() for part in _SPLIT.split(body) if part.strip()]


class OpenFoodFactsIngredientSource(IngredientSource):
    """
    Thin wrapper around the OpenFoodFacts public API returning ingredient order
    as printed on the label.
    """

    BASE_URL = "https://world.openfoodfacts.org/api/v0/product/{ean}.json"

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = 5.0):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.log = logging.getLogger(self.__class__.__name__)

    def get_ingredients(self, ean: str) -> Optional[List[str]]:
        try:
            response = self.session.get(
                self.BASE_URL.format(ean=ean), timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            self.log.warning("OpenFoodFacts fetch failed for %s: %s", ean, exc)
            return None

        if not data or data.get("status") != 1:
            self.log.info("Product %s not found on OpenFoodFacts", ean)
            return None

        return self._extract_ingredients(data.get("product") or {})

    @staticmethod
    def _extract_ingredients(product: dict) -> List[str]:
        structured = [
            str(item["text"]).strip()
            for item in product.get("ingredients") or []
            if isinstance(item, dict) and item.get("text")
        ]
        if structured:
            return structured

        for key in (
            "ingredients_text_" + str(product.get("lang", "en")),
            "ingredients_text_en",
            "ingredients_text",
        ):
            text = product.get(key)
            if text:
                return split_ingredients_text(str(text))
        return []
