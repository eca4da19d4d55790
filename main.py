"""
CLI entrypoint to compute allergen risk for a meal or a scanned product.

Flow:
- Parse user inputs (ingredients or EAN, allergen profile, output format).
- Resolve the allergen profile (name[:severity[:sensitivity]] tokens).
- Fetch the ingredient list from OpenFoodFacts when an EAN is given.
- Split the ingredients into matched/safe and compute the aggregated risk.
- Render either a text dashboard or JSON payload.
"""

import argparse
import json
import logging
import sys
from typing import Dict, List, Optional

from allergy_risk import (
    AllergenProfileEntry,
    AllergyRiskError,
    OpenFoodFactsIngredientSource,
    RiskEngine,
    RiskResult,
    match_ingredients,
    should_alert,
)
from allergy_risk.ingredient_source import split_ingredients_text

# Simple i18n table for CLI output (extendable with more locales).
TRANSLATIONS = {
    "en": {
        "quick_view": "=== Quick view ===",
        "details": "=== Details ===",
        "section_ingredients": "Ingredients",
        "section_matches": "Allergen matches",
        "section_safe": "Safe ingredients",
        "per_allergen_breakdown": "Per-allergen breakdown:",
        "total_risk": "Total risk",
        "highest_concern": "Highest concern",
        "no_matches": "No allergens from your profile were found.",
        "alert": "ALERT",
        "product_not_found": "Product not found.",
        "no_ingredients": "No ingredients to analyse.",
        "tier_low": "Low Risk",
        "tier_moderate": "Moderate Risk",
        "tier_high": "High Risk",
    },
    "pt": {
        "quick_view": "=== Visão rápida ===",
        "details": "=== Detalhes ===",
        "section_ingredients": "Ingredientes",
        "section_matches": "Alérgenos encontrados",
        "section_safe": "Ingredientes seguros",
        "per_allergen_breakdown": "Análise por alérgeno:",
        "total_risk": "Risco total",
        "highest_concern": "Maior preocupação",
        "no_matches": "Nenhum alérgeno do seu perfil foi encontrado.",
        "alert": "ALERTA",
        "product_not_found": "Produto não encontrado.",
        "no_ingredients": "Sem ingredientes para analisar.",
        "tier_low": "Risco baixo",
        "tier_moderate": "Risco moderado",
        "tier_high": "Risco alto",
    },
}

_TIER_KEYS = {
    "Low Risk": "tier_low",
    "Moderate Risk": "tier_moderate",
    "High Risk": "tier_high",
}


def _t(key: str, lang: str = "en") -> str:
    """Translate a key to the requested language with English fallback."""
    bundle = TRANSLATIONS.get(lang, TRANSLATIONS["en"])
    template = bundle.get(key) or TRANSLATIONS["en"].get(key, key)
    return template


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Configure and parse CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Calculate allergen risk for a list of ingredients"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--ingredients",
        help="Comma-separated ingredients in label order (e.g. 'bread, peanut butter, banana')",
    )
    source.add_argument("--ean", help="Product barcode/EAN to look up on OpenFoodFacts")
    parser.add_argument(
        "--allergies",
        required=True,
        help="Comma-separated allergens, each as name[:severity[:sensitivity]] "
        "(e.g. peanuts:high:severe,dairy)",
    )
    parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--alert-threshold",
        choices=["low", "medium", "high"],
        default="low",
        help="Lowest alert severity that should be flagged (default: low)",
    )
    parser.add_argument(
        "--lang",
        default="en",
        help="Language for output labels (e.g. en, pt). Defaults to en.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=False,
        help="Log per-allergen scoring details",
    )
    return parser.parse_args(argv)


def parse_allergies(raw: str) -> List[AllergenProfileEntry]:
    """Turn 'peanuts:high:severe,dairy' into profile entries."""
    entries = []
    for token in raw.split(","):
        token = token.strip()
        if not token:
            continue
        parts = [part.strip() for part in token.split(":")]
        if len(parts) > 3:
            raise AllergyRiskError(f"Too many ':' fields in allergen {token!r}")
        name = parts[0]
        severity = parts[1] if len(parts) > 1 and parts[1] else "moderate"
        sensitivity = parts[2] if len(parts) > 2 and parts[2] else "moderate"
        entries.append(
            AllergenProfileEntry(allergen=name, severity=severity, sensitivity=sensitivity)
        )
    return entries


def render_bar(score: float, width: int = 30) -> str:
    """ASCII bar to visualize a 0-100 score."""
    filled = int((score / 100.0) * width)
    return f"[{'#' * filled}{'.' * (width - filled)}]"


def tier_label(tier: str, lang: str = "en") -> str:
    return _t(_TIER_KEYS.get(tier, tier), lang)


def render_text_result(
    result: RiskResult,
    ingredients: List[str],
    matches: List[str],
    lang: str = "en",
    alert: bool = False,
) -> str:
    """Pretty-print risk assessment in a text-first dashboard layout."""
    lines = []

    # Quick view (what users see first)
    lines.append(_t("quick_view", lang))
    headline = (
        f"{_t('total_risk', lang)}: {result.risk_score}/100 "
        f"({tier_label(result.risk_tier.value, lang)}) {render_bar(result.risk_score)}"
    )
    if alert:
        headline = f"{_t('alert', lang)} {headline}"
    lines.append(headline)
    worst = result.worst_offender()
    if worst:
        detail = result.per_allergen[worst]
        lines.append(
            f"{_t('highest_concern', lang)}: {worst} {detail.normalized_score}/100 "
            f"({tier_label(detail.risk_tier.value, lang)})"
        )
    else:
        lines.append(_t("no_matches", lang))

    lines.append(f"\n{_t('section_ingredients', lang)}:")
    lines.append(f"  {', '.join(ingredients)}")
    if matches:
        lines.append(f"\n{_t('section_matches', lang)}:")
        for ingredient in matches:
            lines.append(f"  - {ingredient}")
    safe = [i for i in ingredients if i not in matches]
    if safe:
        lines.append(f"\n{_t('section_safe', lang)}:")
        lines.append(f"  {', '.join(safe)}")

    # Detailed reasoning for expert users
    if result.per_allergen:
        lines.append("\n" + _t("details", lang))
        lines.append(_t("per_allergen_breakdown", lang))
        for allergen, detail in result.per_allergen.items():
            lines.append(
                f"  - {allergen}: {detail.normalized_score}/100 "
                f"({tier_label(detail.risk_tier.value, lang)}) "
                f"{render_bar(detail.normalized_score)} | {detail.explanation}"
            )
    else:
        lines.append(f"\n{result.explanation}")
    return "\n".join(lines)


def build_output(
    result: RiskResult, ingredients: List[str], matches: List[str], alert: bool
) -> Dict[str, object]:
    payload = result.to_dict()
    payload["ingredients"] = list(ingredients)
    payload["matches"] = list(matches)
    payload["safe"] = [i for i in ingredients if i not in matches]
    payload["alert"] = alert
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint: resolve inputs, run assessment, render output."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        profile = parse_allergies(args.allergies)
    except AllergyRiskError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.ean:
        ingredients = OpenFoodFactsIngredientSource().get_ingredients(args.ean)
        if ingredients is None:
            print(_t("product_not_found", args.lang))
            return 1
    else:
        ingredients = split_ingredients_text(args.ingredients)
    if not ingredients:
        print(_t("no_ingredients", args.lang))
        return 0

    engine = RiskEngine()
    matches = match_ingredients(
        ingredients, [entry.allergen for entry in profile], synonyms=engine.synonyms
    ).matches
    result = engine.assess(ingredients, profile)
    alert = bool(result.matched_allergens) and should_alert(
        result.alert_severity, args.alert_threshold
    )

    if args.format == "json":
        print(json.dumps(build_output(result, ingredients, matches, alert), indent=2))
    else:
        print(render_text_result(result, ingredients, matches, lang=args.lang, alert=alert))
    return 0


if __name__ == "__main__":
    sys.exit(main())
