"""
Risk Profile Data Models — Declarative profile configuration and validation reports.

Profiles are loaded from YAML and are treated as read-only values by the engine.
Numeric fields are coerced permissively: a malformed score counts as 0 and a
malformed threshold falls back to a sane value instead of failing the load.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_RISK_THRESHOLD = 5
MIN_RISK_THRESHOLD = 1


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_score(value: Any) -> int:
    """Point value of a factor; anything non-numeric scores 0."""
    number = _as_number(value)
    if number is None:
        return 0
    return int(round(number))


def coerce_threshold(value: Any) -> int:
    """Breach threshold; missing or 0 → default, otherwise at least the floor."""
    number = _as_number(value)
    if number is None or number == 0:
        return DEFAULT_RISK_THRESHOLD
    return max(MIN_RISK_THRESHOLD, int(round(number)))


class CategoryConfig(BaseModel):
    """Descriptive category metadata carried by a profile."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    description: str = ""
    enabled: bool = True


class RiskProfile(BaseModel):
    """A named selection of enabled factors, their points, and a threshold."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str = ""
    description: str = ""
    version: str = "1.0"
    created_at: str | None = None
    created_by: str = "system"
    is_default: bool = False
    enabled_factors: frozenset[str] = Field(default_factory=frozenset)
    risk_scoring_enabled: bool = False
    risk_threshold: int = DEFAULT_RISK_THRESHOLD
    risk_scores: dict[str, int] = Field(default_factory=dict)
    categories: dict[str, CategoryConfig] = Field(default_factory=dict)

    @field_validator("name", "description", "created_by", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("version", mode="before")
    @classmethod
    def _version_to_str(cls, value: Any) -> str:
        # YAML reads a bare 1.0 as a float
        return "1.0" if value is None else str(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _timestamp_to_str(cls, value: Any) -> str | None:
        if value is None:
            return None
        if hasattr(value, "isoformat"):
            return value.isoformat()
        return str(value)

    @field_validator("is_default", "risk_scoring_enabled", mode="before")
    @classmethod
    def _none_to_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("enabled_factors", mode="before")
    @classmethod
    def _normalize_enabled(cls, value: Any) -> frozenset[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset([value])
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise ValueError(f"enabled_factors must be a list of factor ids, got {type(value).__name__}")
        return frozenset(str(item) for item in value if item is not None)

    @field_validator("risk_threshold", mode="before")
    @classmethod
    def _normalize_threshold(cls, value: Any) -> int:
        return coerce_threshold(value)

    @field_validator("risk_scores", mode="before")
    @classmethod
    def _normalize_scores(cls, value: Any) -> dict[str, int]:
        if not isinstance(value, Mapping):
            return {}
        return {str(factor_id): coerce_score(score) for factor_id, score in value.items()}

    @field_validator("categories", mode="before")
    @classmethod
    def _normalize_categories(cls, value: Any) -> dict[str, Any]:
        if not isinstance(value, Mapping):
            return {}
        return {str(key): meta for key, meta in value.items() if isinstance(meta, Mapping)}

    @classmethod
    def from_yaml_dict(cls, profile_id: str, data: Mapping[str, Any]) -> RiskProfile:
        """Build a profile from a parsed YAML document."""
        scores = data.get("risk_scores")
        if scores is None:
            # Older profiles used risk_points
            scores = data.get("risk_points")
        return cls(
            id=profile_id,
            name=data.get("name"),
            description=data.get("description"),
            version=data.get("version", "1.0"),
            created_at=data.get("created_at"),
            created_by=data.get("created_by") or "system",
            is_default=data.get("is_default"),
            enabled_factors=data.get("enabled_factors"),
            risk_scoring_enabled=data.get("risk_scoring_enabled"),
            risk_threshold=data.get("risk_threshold"),
            risk_scores=scores,
            categories=data.get("categories"),
        )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Serialize back to the on-disk YAML shape."""
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "created_at": self.created_at,
            "created_by": self.created_by,
            "is_default": self.is_default,
            "risk_scoring_enabled": self.risk_scoring_enabled,
            "risk_threshold": self.risk_threshold,
            "enabled_factors": sorted(self.enabled_factors),
            "risk_scores": dict(self.risk_scores),
            "categories": {key: meta.model_dump() for key, meta in self.categories.items()},
        }


class DefaultProfileEntry(BaseModel):
    """One profile file and whether it claims to be the default."""

    name: str
    file: str
    is_default: bool = False


class ProfileValidation(BaseModel):
    """Result of validating the whole profile directory."""

    is_valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    default_profiles: list[DefaultProfileEntry] = Field(default_factory=list)

    def add_error(self, error: str) -> None:
        self.is_valid = False
        self.errors.append(error)
