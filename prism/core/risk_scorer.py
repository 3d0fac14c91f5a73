"""
Risk Scoring Engine — Weighted score and threshold verdict for one entity.

    total_score = Σ profile.risk_scores[id] for each distinct triggered id with score > 0
    meets_threshold = total_score >= profile.risk_threshold

Only factors with a positive score appear in the breakdown, so the total is
always the sum of the listed contributions. A profile with scoring disabled
yields the all-zero result, which callers treat as "do not show a score".
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from prism.models.profile_models import RiskProfile, coerce_score, coerce_threshold
from prism.models.score_models import EntityRiskScore, RiskLevel, TriggeredFactor


def compute_entity_risk_score(
    triggered_factor_ids: Iterable[str],
    profile: RiskProfile,
) -> EntityRiskScore:
    """
    Score triggered factor ids against a risk profile.

    Ids are deduplicated in first-seen order. Missing or malformed point
    values count as 0. Does not raise for any well-formed profile.

    Args:
        triggered_factor_ids: Factor ids raised for the entity, usually
            already filtered by the same profile.
        profile: Active risk profile.

    Returns:
        EntityRiskScore with per-factor contributions and the verdict.
    """
    if not profile.risk_scoring_enabled:
        return EntityRiskScore(
            total_score=0,
            triggered_risk_factors=[],
            meets_threshold=False,
            threshold=0,
        )

    scores = profile.risk_scores if isinstance(profile.risk_scores, Mapping) else {}
    threshold = coerce_threshold(profile.risk_threshold)

    triggered: list[TriggeredFactor] = []
    seen: set[str] = set()
    for factor_id in triggered_factor_ids:
        if not isinstance(factor_id, str) or factor_id in seen:
            continue
        seen.add(factor_id)
        score = coerce_score(scores.get(factor_id))
        if score > 0:
            triggered.append(TriggeredFactor(id=factor_id, score=score))

    total_score = sum(f.score for f in triggered)

    return EntityRiskScore(
        total_score=total_score,
        triggered_risk_factors=triggered,
        meets_threshold=total_score >= threshold,
        threshold=threshold,
    )


def risk_level(score: int, threshold: int) -> RiskLevel:
    """
    Coarse band for a score relative to its threshold.

    0 → low, below threshold → medium, below 1.5× threshold → high,
    otherwise critical.
    """
    if score == 0:
        return "low"
    if score < threshold:
        return "medium"
    if score < threshold * 1.5:
        return "high"
    return "critical"
