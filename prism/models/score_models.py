"""
Risk Scoring Data Models — Score breakdown for a single entity or match.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from prism.models.factor_models import CategoryGroup


class TriggeredFactor(BaseModel):
    """A triggered factor and the points it contributed."""

    id: str
    score: int


class EntityRiskScore(BaseModel):
    """Score of one entity against one risk profile."""

    total_score: int = Field(default=0, description="Sum of triggered factor scores")
    triggered_risk_factors: list[TriggeredFactor] = Field(default_factory=list)
    meets_threshold: bool = False
    threshold: int = Field(
        default=0, description="Profile threshold; 0 means scoring is disabled"
    )


RiskLevel = Literal["low", "medium", "high", "critical"]


class EntityAssessment(BaseModel):
    """Filtered factors, score, and display groups for one screened entity."""

    factor_ids: list[str] = Field(default_factory=list)
    score: EntityRiskScore = Field(default_factory=EntityRiskScore)
    risk_level: RiskLevel = "low"
    categories: list[CategoryGroup] = Field(default_factory=list)
    profile_id: str | None = None

    @property
    def has_risk(self) -> bool:
        return bool(self.factor_ids)


class ScoreAuditEntry(BaseModel):
    """Audit metadata for one scoring decision."""

    profile_id: str | None = None
    factors_evaluated: int = 0
    factors_scored: int = 0
    total_score: int = 0
    threshold: int = 0
    meets_threshold: bool = False
    scoring_enabled: bool = False
    duration_ms: float = 0.0
