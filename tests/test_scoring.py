"""
Tests for the three-factor scorer: weights, normalization and explanation.
"""

import itertools

import pytest

from allergy_risk import (
    Exposure,
    InvalidRiskFactorError,
    RiskCalculationResult,
    RiskFactors,
    RiskTier,
    Sensitivity,
    Severity,
    aggregate_results,
    score_factors,
)
from allergy_risk.scoring import normalize_raw_score

REACHABLE_RAW = {1, 2, 3, 4, 6, 8, 9, 12, 18, 27}


def test_every_combination_stays_in_range():
    for severity, exposure, sensitivity in itertools.product(Severity, Exposure, Sensitivity):
        result = score_factors(RiskFactors(severity, exposure, sensitivity))
        assert result.raw_score in REACHABLE_RAW
        assert 4 <= result.normalized_score <= 100
        assert result.normalized_score == round(result.raw_score / 27 * 100)


def test_maximum_factors():
    result = score_factors(RiskFactors(Severity.HIGH, Exposure.HIGH, Sensitivity.SEVERE))
    assert result.raw_score == 27
    assert result.normalized_score == 100
    assert result.risk_tier == RiskTier.HIGH


def test_minimum_factors():
    result = score_factors(RiskFactors(Severity.LOW, Exposure.TRACE, Sensitivity.MILD))
    assert result.raw_score == 1
    assert result.normalized_score == 4
    assert result.risk_tier == RiskTier.LOW


def test_raw_eight_is_still_low_risk():
    result = score_factors(
        RiskFactors(Severity.MODERATE, Exposure.LOW, Sensitivity.MODERATE)
    )
    assert result.raw_score == 8
    assert result.normalized_score == 30
    assert result.risk_tier == RiskTier.LOW


@pytest.mark.parametrize(
    "raw, expected",
    [(1, 4), (2, 7), (3, 11), (4, 15), (6, 22), (8, 30), (9, 33), (12, 44), (18, 67), (27, 100)],
)
def test_normalization_table(raw, expected):
    assert normalize_raw_score(raw) == expected


def test_explanation_is_templated():
    result = score_factors(RiskFactors(Severity.HIGH, Exposure.LOW, Sensitivity.MILD))
    assert result.explanation == (
        "Risk calculated from: high allergen severity (3), low exposure level (2), "
        "mild user sensitivity (1). Raw score: 6/27."
    )
    assert result.normalized_score == 22


def test_string_factors_are_coerced():
    result = score_factors(RiskFactors("HIGH", "high", " Severe "))
    assert result.raw_score == 27


@pytest.mark.parametrize(
    "kwargs",
    [
        {"severity": "extreme", "exposure": "high", "sensitivity": "mild"},
        {"severity": "low", "exposure": "medium", "sensitivity": "mild"},
        {"severity": "low", "exposure": "high", "sensitivity": None},
    ],
)
def test_invalid_factor_is_rejected(kwargs):
    with pytest.raises(InvalidRiskFactorError):
        RiskFactors(**kwargs)


def test_invalid_factor_is_a_value_error():
    with pytest.raises(ValueError):
        RiskFactors("low", "high", "catastrophic")


def _result(score, explanation):
    return RiskCalculationResult(
        raw_score=0, normalized_score=score, risk_tier=RiskTier.LOW, explanation=explanation
    )


def test_aggregation_takes_maximum_not_sum():
    worst = aggregate_results([_result(20, "a"), _result(80, "b")])
    assert worst.normalized_score == 80
    assert worst.explanation == "b"


def test_aggregation_keeps_first_on_ties():
    worst = aggregate_results([_result(44, "first"), _result(44, "second"), _result(7, "c")])
    assert worst.explanation == "first"


def test_aggregation_of_nothing():
    assert aggregate_results([]) is None
