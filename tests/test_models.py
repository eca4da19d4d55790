"""
Tests for profile resolution and result models.
"""

import pytest

from allergy_risk import (
    AlertSeverity,
    AllergenProfileEntry,
    InvalidProfileError,
    InvalidRiskFactorError,
    RiskCalculationResult,
    RiskResult,
    RiskTier,
    Sensitivity,
    Severity,
    SeverityLabel,
    build_profile,
)


def test_bare_name_defaults_to_moderate():
    entry = AllergenProfileEntry.from_name("peanuts")
    assert entry.severity == Severity.MODERATE
    assert entry.sensitivity == Sensitivity.MODERATE


def test_build_profile_accepts_mixed_shapes():
    existing = AllergenProfileEntry("sesame", Severity.LOW, Sensitivity.MILD)
    entries = build_profile(
        [
            "peanuts",
            {"allergen": "dairy", "severity": "high", "sensitivity": "severe"},
            {"allergen": "soy"},
            existing,
        ]
    )
    assert [e.allergen for e in entries] == ["peanuts", "dairy", "soy", "sesame"]
    assert entries[1].severity == Severity.HIGH
    assert entries[1].sensitivity == Sensitivity.SEVERE
    assert entries[2].severity == Severity.MODERATE
    assert entries[3] is existing


def test_build_profile_rejects_unknown_shapes():
    with pytest.raises(InvalidProfileError):
        build_profile([42])


def test_mapping_without_allergen_is_rejected():
    with pytest.raises(InvalidProfileError):
        build_profile([{"severity": "high"}])


def test_invalid_severity_in_mapping_is_rejected():
    with pytest.raises(InvalidRiskFactorError):
        build_profile([{"allergen": "milk", "severity": "extreme"}])


def test_entry_round_trips_to_dict():
    entry = AllergenProfileEntry("milk", "HIGH", "mild")
    assert entry.to_dict() == {"allergen": "milk", "severity": "high", "sensitivity": "mild"}


def _detail(score):
    return RiskCalculationResult(
        raw_score=12, normalized_score=score, risk_tier=RiskTier.MODERATE, explanation="x"
    )


def test_worst_offender_prefers_first_on_ties():
    result = RiskResult(
        risk_score=44,
        matched_allergens=["peanuts", "sesame", "milk"],
        severity=SeverityLabel.MODERATE,
        risk_tier=RiskTier.MODERATE,
        explanation="x",
        per_allergen={"peanuts": _detail(44), "sesame": _detail(44), "milk": _detail(11)},
    )
    assert result.worst_offender() == "peanuts"
    assert result.alert_severity == AlertSeverity.MEDIUM


def test_to_dict_uses_plain_values():
    result = RiskResult(
        risk_score=5,
        matched_allergens=[],
        severity=SeverityLabel.LOW,
        risk_tier=RiskTier.LOW,
        explanation="none",
    )
    payload = result.to_dict()
    assert payload["severity"] == "LOW"
    assert payload["risk_tier"] == "Low Risk"
    assert payload["alert_severity"] == "low"
    assert payload["per_allergen"] == {}
    assert result.worst_offender() is None


def test_blank_severity_is_rejected_not_defaulted():
    with pytest.raises(InvalidRiskFactorError):
        build_profile([{"allergen": "milk", "severity": ""}])


def test_falsy_sensitivity_is_rejected_not_defaulted():
    with pytest.raises(InvalidRiskFactorError):
        build_profile([{"allergen": "milk", "sensitivity": 0}])


def test_explicit_none_falls_back_to_moderate():
    (entry,) = build_profile([{"allergen": "milk", "severity": None, "sensitivity": None}])
    assert entry.severity == Severity.MODERATE
    assert entry.sensitivity == Sensitivity.MODERATE
