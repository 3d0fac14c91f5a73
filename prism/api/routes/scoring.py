"""
Scoring Routes — profile-weighted scoring of screened entities.

  POST /score   → score a flat list of triggered factor ids
  POST /assess  → filter, score and group an entity's screening hits

Both resolve the profile from ``profile_id`` or fall back to the default
profile. With no profile at all, scoring yields the all-zero result.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from prism.api.dependencies import get_audit_logger, get_pipeline, get_profile_store
from prism.audit.logger import AuditLogger
from prism.core.risk_filter import extract_factor_ids, filter_by_profile
from prism.core.risk_scorer import compute_entity_risk_score, risk_level
from prism.engine.pipeline import AssessmentPipeline
from prism.models.api_models import AssessRequest, ScoreRequest, ScoreResponse
from prism.models.profile_models import RiskProfile
from prism.models.score_models import EntityAssessment, EntityRiskScore
from prism.profiles.errors import MultipleDefaultProfilesError
from prism.profiles.store import ProfileStore

logger = logging.getLogger("prism.api.scoring")
router = APIRouter(tags=["scoring"])


def _resolve_profile(store: ProfileStore, profile_id: str | None) -> RiskProfile | None:
    if profile_id:
        profile = store.load(profile_id)
        if profile is None:
            raise HTTPException(status_code=404, detail=f"Profile '{profile_id}' not found")
        return profile
    try:
        return store.load_default()
    except MultipleDefaultProfilesError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.post("/score", response_model=ScoreResponse)
async def score_factors(
    req: ScoreRequest,
    store: ProfileStore = Depends(get_profile_store),
    audit: AuditLogger = Depends(get_audit_logger),
):
    """Score triggered factor ids against a profile."""
    started = time.time()
    profile = _resolve_profile(store, req.profile_id)
    candidates = extract_factor_ids([{"id": factor_id} for factor_id in req.factor_ids])

    if profile is None:
        logger.info("No default profile configured, returning zero score")
        score = EntityRiskScore()
    else:
        refs = filter_by_profile([{"id": factor_id} for factor_id in candidates], profile)
        score = compute_entity_risk_score([ref["id"] for ref in refs], profile)

    audit.record(profile, len(candidates), score, started)

    return ScoreResponse(
        profile_id=profile.id if profile else None,
        score=score,
        risk_level=risk_level(score.total_score, score.threshold),
    )


@router.post("/assess", response_model=EntityAssessment)
async def assess(
    req: AssessRequest,
    store: ProfileStore = Depends(get_profile_store),
    audit: AuditLogger = Depends(get_audit_logger),
    pipeline: AssessmentPipeline = Depends(get_pipeline),
):
    """Run an entity's screening hits through filter, score and grouping."""
    started = time.time()
    profile = _resolve_profile(store, req.profile_id)

    entity_factors = [f.model_dump() for f in req.risk_factors]
    matches = [m.model_dump() for m in req.matches]
    result = pipeline.assess(entity_factors, matches, profile)

    audit.record(profile, len(extract_factor_ids(entity_factors, matches)), result.score, started)
    return result
