"""
Assessment Pipeline — Runs one screened entity through the risk engine.

Pipeline:
1. Collect factor ids from the entity and all of its matches
2. Filter them against the active profile (pass-through when there is none)
3. Score the filtered ids
4. Classify, group and order the same ids for display

Scoring and classification are independent over the filtered id set.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from prism.core.classifier import FactorClassifier, get_classifier
from prism.core.grouper import group_factors, prepare_display
from prism.core.risk_filter import extract_factor_ids, filter_by_profile
from prism.core.risk_scorer import compute_entity_risk_score, risk_level
from prism.models.profile_models import RiskProfile
from prism.models.score_models import EntityAssessment, EntityRiskScore

logger = logging.getLogger("prism.engine.pipeline")


class AssessmentPipeline:
    """Filter → score → group, for one entity at a time."""

    def __init__(self, classifier: FactorClassifier | None = None) -> None:
        self.classifier = classifier or get_classifier()

    def assess(
        self,
        entity_factors: Iterable[Any] | None,
        matches: Iterable[Mapping[str, Any]] | None,
        profile: RiskProfile | None,
    ) -> EntityAssessment:
        """
        Assess an entity's screening hits against a profile.

        Args:
            entity_factors: Entity-level ``risk_factors`` (``{"id": ...}`` items)
            matches: Match records, each optionally carrying ``risk_factors``
            profile: Active risk profile; None disables filtering and scoring

        Returns:
            EntityAssessment with filtered ids, score, risk band and display groups
        """
        candidate_ids = extract_factor_ids(entity_factors, matches)
        factor_ids = filter_by_profile(_as_refs(candidate_ids), profile)
        filtered_ids = [ref["id"] for ref in factor_ids]

        if profile is None:
            score = EntityRiskScore()
        else:
            score = compute_entity_risk_score(filtered_ids, profile)

        categories = prepare_display(group_factors(filtered_ids, self.classifier))

        logger.debug(
            f"Assessed {len(candidate_ids)} factors -> {len(filtered_ids)} after profile "
            f"{profile.id if profile else 'none'}, score {score.total_score}"
        )

        return EntityAssessment(
            factor_ids=filtered_ids,
            score=score,
            risk_level=risk_level(score.total_score, score.threshold),
            categories=categories,
            profile_id=profile.id if profile else None,
        )


def _as_refs(factor_ids: Iterable[str]) -> list[dict[str, str]]:
    return [{"id": factor_id} for factor_id in factor_ids]


def assess_entity(
    entity_factors: Iterable[Any] | None,
    matches: Iterable[Mapping[str, Any]] | None,
    profile: RiskProfile | None,
) -> EntityAssessment:
    """Assess with the shared classifier."""
    return AssessmentPipeline().assess(entity_factors, matches, profile)
