"""
Score thresholds shared by every qualitative mapping.

Risk tier, meal severity label and alert severity all derive from the same two
cut-offs so they can never disagree about where a band starts.
"""

from __future__ import annotations

from typing import Dict, Union

from .models import AlertSeverity, RiskTier, SeverityLabel, coerce_enum

LOW_RISK_MAX = 30
MODERATE_RISK_MAX = 70

_ALERT_RANK: Dict[AlertSeverity, int] = {
    AlertSeverity.LOW: 1,
    AlertSeverity.MEDIUM: 2,
    AlertSeverity.HIGH: 3,
}


def _band(score: float) -> int:
    if score <= LOW_RISK_MAX:
        return 0
    if score <= MODERATE_RISK_MAX:
        return 1
    return 2


def risk_tier(score: float) -> RiskTier:
    return (RiskTier.LOW, RiskTier.MODERATE, RiskTier.HIGH)[_band(score)]


def severity_label(score: float) -> SeverityLabel:
    return (SeverityLabel.LOW, SeverityLabel.MODERATE, SeverityLabel.HIGH)[
        _band(score)
    ]


def alert_severity(score: float) -> AlertSeverity:
    """Alert vocabulary for a normalized score (low / medium / high)."""
    return (AlertSeverity.LOW, AlertSeverity.MEDIUM, AlertSeverity.HIGH)[
        _band(score)
    ]


def should_alert(
    severity: Union[AlertSeverity, str], threshold: Union[AlertSeverity, str]
) -> bool:
    """
    True when ``severity`` reaches the user's alert floor ``threshold``.
    """
    level = coerce_enum(AlertSeverity, severity)
    floor = coerce_enum(AlertSeverity, threshold)
    return _ALERT_RANK[level] >= _ALERT_RANK[floor]
