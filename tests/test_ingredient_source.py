"""
Tests for the OpenFoodFacts ingredient source, using a fake HTTP session.
"""

import requests

from allergy_risk import OpenFoodFactsIngredientSource
from allergy_risk.ingredient_source import split_ingredients_text


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


def test_structured_ingredients_keep_label_order():
    session = FakeSession(
        FakeResponse(
            {
                "status": 1,
                "product": {
                    "ingredients": [
                        {"text": "Wheat flour"},
                        {"text": "peanut butter"},
                        {"id": "en:salt"},
                        {"text": " salt "},
                    ],
                    "ingredients_text": "ignored",
                },
            }
        )
    )
    source = OpenFoodFactsIngredientSource(session=session, timeout=2.0)
    assert source.get_ingredients("123") == ["Wheat flour", "peanut butter", "salt"]
    assert session.calls == [(OpenFoodFactsIngredientSource.BASE_URL.format(ean="123"), 2.0)]


def test_falls_back_to_ingredients_text():
    session = FakeSession(
        FakeResponse(
            {
                "status": 1,
                "product": {"lang": "pt", "ingredients_text_pt": "farinha de trigo, açúcar; sal."},
            }
        )
    )
    source = OpenFoodFactsIngredientSource(session=session)
    assert source.get_ingredients("123") == ["farinha de trigo", "açúcar", "sal"]


def test_product_without_ingredients_gives_empty_list():
    session = FakeSession(FakeResponse({"status": 1, "product": {}}))
    assert OpenFoodFactsIngredientSource(session=session).get_ingredients("1") == []


def test_unknown_product_returns_none():
    session = FakeSession(FakeResponse({"status": 0}))
    assert OpenFoodFactsIngredientSource(session=session).get_ingredients("1") is None


def test_network_error_returns_none():
    session = FakeSession(error=requests.ConnectionError("offline"))
    assert OpenFoodFactsIngredientSource(session=session).get_ingredients("1") is None


def test_http_error_returns_none():
    session = FakeSession(FakeResponse({}, status_code=503))
    assert OpenFoodFactsIngredientSource(session=session).get_ingredients("1") is None


def test_split_ingredients_text():
    assert split_ingredients_text("Ingredients: Wheat flour, sugar; salt.") == [
        "Wheat flour",
        "sugar",
        "salt",
    ]
    assert split_ingredients_text("") == []
