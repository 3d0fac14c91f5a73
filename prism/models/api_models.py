"""
API Request/Response Models — HTTP contract schemas.

Screening payloads are accepted in the shape the screening source returns
them: ``risk_factors: [{"id": ...}]`` on the entity and on each match.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from prism.models.factor_models import CategoryGroup, FactorDescriptor
from prism.models.score_models import EntityRiskScore, RiskLevel


class FactorRef(BaseModel):
    id: str


class MatchInput(BaseModel):
    """One match of a screened entity; extra fields are ignored."""

    id: str | None = None
    risk_factors: list[FactorRef] = Field(default_factory=list)


class ClassifyRequest(BaseModel):
    ids: list[str] = Field(default_factory=list)


class ClassifyResponse(BaseModel):
    data: dict[str, FactorDescriptor] = Field(default_factory=dict)


class GroupResponse(BaseModel):
    categories: list[CategoryGroup] = Field(default_factory=list)
    level_counts: dict[str, int] = Field(default_factory=dict)
    has_risk: bool = False


class ScoreRequest(BaseModel):
    factor_ids: list[str] = Field(default_factory=list)
    profile_id: str | None = Field(
        default=None, description="Profile to score against; the default profile when omitted"
    )


class ScoreResponse(BaseModel):
    profile_id: str | None = None
    score: EntityRiskScore
    risk_level: RiskLevel = "low"


class AssessRequest(BaseModel):
    risk_factors: list[FactorRef] = Field(default_factory=list)
    matches: list[MatchInput] = Field(default_factory=list)
    profile_id: str | None = None


class SetDefaultRequest(BaseModel):
    profile_id: str = Field(..., min_length=1)


class LookupResponse(BaseModel):
    success: bool = True
    data: Any = None


class CreateProfileRequest(BaseModel):
    """A profile upload: the target id and the profile document as YAML text."""

    id: str = Field(..., min_length=1)
    yaml: str = Field(..., min_length=1)
