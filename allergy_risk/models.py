"""
Shared domain models used by the allergy risk engine.

- Severity/Exposure/Sensitivity: the three enumerated risk factors.
- RiskTier/SeverityLabel/AlertSeverity: qualitative vocabularies derived from a score.
- AllergenProfileEntry: one user-declared allergen with its risk attributes.
- RiskFactors/RiskCalculationResult: per-allergen scoring input and output.
- MatchResult: partition of an ingredient list into matched and safe items.
- RiskResult: aggregated result for one meal or scan.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Type, TypeVar, Union


class AllergyRiskError(Exception):
    """Base class for caller contract violations raised by the engine."""


class InvalidRiskFactorError(AllergyRiskError, ValueError):
    """A severity/exposure/sensitivity value outside its enumerated set."""


class InvalidProfileError(AllergyRiskError, TypeError):
    """A profile item that is neither a name, an entry, nor a mapping."""


class Severity(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class Exposure(str, Enum):
    TRACE = "trace"
    LOW = "low"
    HIGH = "high"


class Sensitivity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class RiskTier(str, Enum):
    LOW = "Low Risk"
    MODERATE = "Moderate Risk"
    HIGH = "High Risk"


class SeverityLabel(str, Enum):
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"


class AlertSeverity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value: object) -> E:
    """
    Convert a raw value into ``enum_cls``, rejecting anything outside the set.
    Strings are matched case-insensitively after trimming.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = ", ".join(member.value for member in enum_cls)
    raise InvalidRiskFactorError(
        f"Invalid {enum_cls.__name__.lower()} {value!r}; expected one of: {allowed}"
    )


def _or_default(value: object, default: Enum) -> object:
    """Only a missing (None) value falls back; anything else is validated."""
    return default if value is None else value


@dataclass(frozen=True)
class AllergenProfileEntry:
    """
    A single allergen from the user's profile. Bare names default both risk
    attributes to moderate.
    """

    allergen: str
    severity: Severity = Severity.MODERATE
    sensitivity: Sensitivity = Sensitivity.MODERATE

    def __post_init__(self) -> None:
        if not isinstance(self.allergen, str):
            raise InvalidProfileError(
                f"Allergen name must be a string, got {type(self.allergen).__name__}"
            )
        object.__setattr__(self, "severity", coerce_enum(Severity, self.severity))
        object.__setattr__(
            self, "sensitivity", coerce_enum(Sensitivity, self.sensitivity)
        )

    @classmethod
    def from_name(cls, name: str) -> "AllergenProfileEntry":
        return cls(allergen=name)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "AllergenProfileEntry":
        if "allergen" not in data:
            raise InvalidProfileError("Profile mapping is missing the 'allergen' key")
        return cls(
            allergen=data["allergen"],  # type: ignore[arg-type]
            severity=_or_default(data.get("severity"), Severity.MODERATE),  # type: ignore[arg-type]
            sensitivity=_or_default(data.get("sensitivity"), Sensitivity.MODERATE),  # type: ignore[arg-type]
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "allergen": self.allergen,
            "severity": self.severity.value,
            "sensitivity": self.sensitivity.value,
        }


ProfileItem = Union[str, AllergenProfileEntry, Mapping[str, object]]


def build_profile(items: Iterable[ProfileItem]) -> List[AllergenProfileEntry]:
    """
    Resolve a caller-supplied profile into full entries, once, at the boundary.
    Accepts bare allergen names, ready-made entries, or mappings.
    """
    entries: List[AllergenProfileEntry] = []
    for item in items:
        if isinstance(item, AllergenProfileEntry):
            entries.append(item)
        elif isinstance(item, str):
            entries.append(AllergenProfileEntry.from_name(item))
        elif isinstance(item, Mapping):
            entries.append(AllergenProfileEntry.from_dict(item))
        else:
            raise InvalidProfileError(
                f"Unsupported profile item of type {type(item).__name__}"
            )
    return entries


@dataclass(frozen=True)
class RiskFactors:
    severity: Severity
    exposure: Exposure
    sensitivity: Sensitivity

    def __post_init__(self) -> None:
        object.__setattr__(self, "severity", coerce_enum(Severity, self.severity))
        object.__setattr__(self, "exposure", coerce_enum(Exposure, self.exposure))
        object.__setattr__(
            self, "sensitivity", coerce_enum(Sensitivity, self.sensitivity)
        )


@dataclass(frozen=True)
class RiskCalculationResult:
    raw_score: int
    normalized_score: int
    risk_tier: RiskTier
    explanation: str

    def to_dict(self) -> Dict[str, object]:
        return {
            "raw_score": self.raw_score,
            "normalized_score": self.normalized_score,
            "risk_tier": self.risk_tier.value,
            "explanation": self.explanation,
        }


@dataclass
class MatchResult:
    matches: List[str] = field(default_factory=list)
    safe: List[str] = field(default_factory=list)


@dataclass
class RiskResult:
    """
    Aggregated risk for one meal or scan. ``per_allergen`` keeps the scored
    detail of every matched allergen in profile order.
    """

    risk_score: int
    matched_allergens: List[str]
    severity: SeverityLabel
    risk_tier: RiskTier
    explanation: str
    per_allergen: Dict[str, RiskCalculationResult] = field(default_factory=dict)

    @property
    def alert_severity(self) -> AlertSeverity:
        from .risk_tiers import alert_severity

        return alert_severity(self.risk_score)

    def worst_offender(self) -> Optional[str]:
        if not self.per_allergen:
            return None
        best: Optional[str] = None
        for allergen, detail in self.per_allergen.items():
            if best is None or detail.normalized_score > self.per_allergen[best].normalized_score:
                best = allergen
        return best

    def to_dict(self) -> Dict[str, object]:
        return {
            "risk_score": self.risk_score,
            "matched_allergens": list(self.matched_allergens),
            "severity": self.severity.value,
            "risk_tier": self.risk_tier.value,
            "explanation": self.explanation,
            "alert_severity": self.alert_severity.value,
            "per_allergen": {
                allergen: detail.to_dict()
                for allergen, detail in self.per_allergen.items()
            },
        }
