"""
Risk Factor Data Models — Categories, severities, and classified descriptors.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    """Closed set of display categories a factor can land in."""

    SANCTIONS = "sanctions"
    POLITICAL_EXPOSURE = "political_exposure"
    REGULATORY_ACTION = "regulatory_action"
    FORCED_LABOR = "forced_labor"
    ENVIRONMENTAL_RISK = "environmental_risk"
    ADVERSE_MEDIA = "adverse_media"
    RELEVANT = "relevant"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    ELEVATED = "elevated"
    OTHER = "other"


class Level(str, Enum):
    CRITICAL = "Critical"
    HIGH = "High"
    ELEVATED = "Elevated"
    STANDARD = "Standard"


class FactorType(str, Enum):
    """Provenance of a factor hit in the screening graph."""

    PSA = "psa"
    SEED = "seed"
    NETWORK = "network"
    UNKNOWN = "unknown"


class DescriptorSource(str, Enum):
    """Which resolution tier produced a descriptor."""

    REFERENCE = "reference"
    CURATED = "curated"
    HEURISTIC = "heuristic"


LEVEL_TO_SEVERITY: dict[Level, Severity] = {
    Level.CRITICAL: Severity.CRITICAL,
    Level.HIGH: Severity.HIGH,
    Level.ELEVATED: Severity.ELEVATED,
    Level.STANDARD: Severity.OTHER,
}


class ReferenceFactor(BaseModel):
    """One row of the canonical reference dataset."""

    name: str
    category: str = "unknown"
    level: Level = Level.STANDARD
    description: str = ""
    type: str = "unknown"


class FactorDescriptor(BaseModel):
    """Structured, human-readable view of a raw factor id."""

    label: str = Field(..., min_length=1, description="Human-readable factor name")
    category: Category
    severity: Severity
    level: Level | None = Field(
        default=None, description="Finer-grained level, preferred over severity when present"
    )
    description: str | None = None
    type: FactorType | None = Field(default=None, description="Provenance tag, sort tie-breaker only")
    source: DescriptorSource = DescriptorSource.HEURISTIC


class GroupedFactor(BaseModel):
    """A factor id paired with its descriptor inside a category bucket."""

    id: str
    descriptor: FactorDescriptor


class CategoryGroup(BaseModel):
    """A display-ready category bucket."""

    category: Category
    name: str
    description: str = ""
    highest_severity: Severity
    factors: list[GroupedFactor] = Field(default_factory=list)
