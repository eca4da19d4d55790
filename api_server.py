"""
FastAPI wrapper for the allergy risk engine.

Endpoints:
- GET /health         : readiness probe
- POST /match         : split ingredients into allergen matches and safe items
- POST /risk          : compute allergen risk for an ingredient list + profile
- POST /risk/barcode  : same, with ingredients fetched from OpenFoodFacts

Run locally:
    uvicorn api_server:app --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

import os
from typing import Dict, List, Optional, Union

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from allergy_risk import (
    AlertSeverity,
    AllergenProfileEntry,
    AllergyRiskError,
    OpenFoodFactsIngredientSource,
    RiskEngine,
    Sensitivity,
    Severity,
    build_profile,
    match_ingredients,
    should_alert,
)

app = FastAPI(
    title="Allergy Risk API",
    description="REST API for allergen risk scoring of ingredient lists.",
    version="1.0.0",
)

# CORS for broad consumption; tighten in production by setting allowed origins.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AllergenEntryModel(BaseModel):
    allergen: str = Field(..., description="Allergen name (e.g. peanuts, dairy)")
    severity: Severity = Field(Severity.MODERATE, description="low | moderate | high")
    sensitivity: Sensitivity = Field(
        Sensitivity.MODERATE, description="mild | moderate | severe"
    )


AllergenItem = Union[str, AllergenEntryModel]


class MatchRequest(BaseModel):
    ingredients: List[str] = Field(..., description="Ingredients in label order")
    allergens: List[str] = Field(..., description="User allergen names")
    ai_categories: Optional[List[str]] = Field(
        None, description="Allergen categories flagged by an upstream image extractor"
    )
    expand_synonyms: bool = Field(
        False, description="Expand allergens into related ingredient terms first"
    )


class MatchResponse(BaseModel):
    matches: List[str]
    safe: List[str]


class RiskRequest(BaseModel):
    ingredients: List[str] = Field(..., description="Ingredients in label order")
    allergens: List[AllergenItem] = Field(
        ..., description="Bare allergen names or {allergen, severity, sensitivity} objects"
    )
    alert_threshold: AlertSeverity = Field(
        AlertSeverity.LOW, description="Lowest alert severity to flag"
    )


class BarcodeRiskRequest(BaseModel):
    barcode: str = Field(..., description="Product EAN/UPC barcode")
    allergens: List[AllergenItem]
    alert_threshold: AlertSeverity = AlertSeverity.LOW


class RiskResponse(BaseModel):
    risk_score: int
    matched_allergens: List[str]
    severity: str
    risk_tier: str
    explanation: str
    alert_severity: str
    alert: bool
    per_allergen: Dict[str, Dict]
    ingredients: List[str]


# Shared singletons; the engine holds no per-request state.
engine = RiskEngine()
ingredient_source = OpenFoodFactsIngredientSource(
    timeout=float(os.environ.get("OFF_TIMEOUT", "5.0"))
)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


def _to_entries(items: List[AllergenItem]) -> List[AllergenProfileEntry]:
    raw = [item if isinstance(item, str) else item.model_dump() for item in items]
    try:
        return build_profile(raw)
    except AllergyRiskError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


def _risk_payload(
    ingredients: List[str], items: List[AllergenItem], threshold: AlertSeverity
) -> Dict:
    result = engine.assess(ingredients, _to_entries(items))
    payload = result.to_dict()
    payload["alert"] = bool(result.matched_allergens) and should_alert(
        result.alert_severity, threshold
    )
    payload["ingredients"] = list(ingredients)
    return payload


@app.post("/match", response_model=MatchResponse)
def match(request: MatchRequest):
    result = match_ingredients(
        request.ingredients,
        request.allergens,
        synonyms=engine.synonyms if request.expand_synonyms else None,
        ai_categories=request.ai_categories,
    )
    return {"matches": result.matches, "safe": result.safe}


@app.post("/risk", response_model=RiskResponse)
def risk(request: RiskRequest):
    return _risk_payload(request.ingredients, request.allergens, request.alert_threshold)


@app.post("/risk/barcode", response_model=RiskResponse)
def risk_barcode(request: BarcodeRiskRequest):
    ingredients = ingredient_source.get_ingredients(request.barcode)
    if ingredients is None:
        raise HTTPException(status_code=404, detail="Product not found on OpenFoodFacts")
    return _risk_payload(ingredients, request.allergens, request.alert_threshold)


if __name__ == "__main__":
    uvicorn.run(
        "api_server:app",
        host=os.environ.get("RISK_API_HOST", "0.0.0.0"),
        port=int(os.environ.get("RISK_API_PORT", "8000")),
        reload=False,
    )
